"""Directory (LDAP / Active Directory) access layer.

Public API:
    - DirectoryConfig
    - RawRecord
    - DirectoryClient
    - error taxonomy (DirectoryError and subclasses)
"""

from .models import DirectoryConfig, RawRecord
from .client import DirectoryClient
from .errors import BindError, DirectoryConnectionError, DirectoryError, DirectoryTimeout

__all__ = [
    "DirectoryConfig",
    "RawRecord",
    "DirectoryClient",
    "DirectoryError",
    "DirectoryConnectionError",
    "BindError",
    "DirectoryTimeout",
]
