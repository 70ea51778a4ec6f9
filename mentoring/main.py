import uvicorn

from .logger import get_logger
from .settings import settings


logger = get_logger(__name__)


def main() -> None:
    logger.info(f"Starting mentoring service on {settings.host}:{settings.port}")
    uvicorn.run(
        "mentoring.app:app",
        host=settings.host,
        port=settings.port,
        root_path=settings.root_path,
        reload=settings.reload,
    )


if __name__ == "__main__":
    main()
