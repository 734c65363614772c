"""stmtrecon - Rapprochement de relevés bancaires sans clé commune."""

from stmtrecon.config import ConfigError, ConfigFileError, ReconConfig, StmtReconError
from stmtrecon.io_tables import TableFileError

__all__ = [
    "__version__",
    "StmtReconError",
    "ConfigError",
    "ConfigFileError",
    "ReconConfig",
    "TableFileError",
]

__version__ = "0.1.0"
