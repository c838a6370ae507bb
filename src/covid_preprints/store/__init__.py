from .models import Base, Preprint
from .db import create_sqlite_engine, load_records, write_records

__all__ = [
	"Base",
	"Preprint",
	"create_sqlite_engine",
	"load_records",
	"write_records",
]
