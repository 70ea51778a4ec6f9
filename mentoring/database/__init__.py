from .database import Base, UTCDateTime, db, db_context, exists, filter_by, select


__all__ = ["Base", "UTCDateTime", "db", "db_context", "exists", "filter_by", "select"]
