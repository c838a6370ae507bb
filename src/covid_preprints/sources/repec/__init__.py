"""RePEc working papers harvested over OAI-PMH."""

from .adapter import RepecSource
from .mapper import map_repec_record

__all__ = [
	"RepecSource",
	"map_repec_record",
]
