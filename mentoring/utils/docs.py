from typing import Any, Type

from ..exceptions.api_exception import APIException


def responses(default: type, *args: Type[APIException]) -> dict[int | str, dict[str, Any]]:
    """Build the openapi `responses` of an endpoint from its return type and the exceptions it may raise."""

    exceptions: dict[int, list[Type[APIException]]] = {}
    for exc in args:
        exceptions.setdefault(exc.status_code, []).append(exc)

    return {
        200: {"model": default},
        **{
            code: {
                "description": " / ".join(exc.description for exc in excs),
                "content": {
                    "application/json": {
                        "examples": {
                            exc.__name__: {"description": exc.description, "value": {"detail": exc.detail}}
                            for exc in excs
                        }
                    }
                },
            }
            for code, excs in exceptions.items()
        },
    }
