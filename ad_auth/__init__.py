"""Directory backed authentication and authorization (LDAP / AD, NTLM pass-through)."""

__version__ = "0.1.0"
