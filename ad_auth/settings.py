from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .ad import DirectoryConfig
from .ad_utils import split_list


class Settings(BaseSettings):
    # App
    app_name: str = "AD Auth"
    # Header carrying the upstream identity; empty = only the server REMOTE_USER.
    remote_user_header: str = Field("", alias="AUTH_REMOTE_USER_HEADER")

    # Directory connection
    host: str = Field(..., alias="LDAP_HOST")
    port: int = Field(0, alias="LDAP_PORT")  # 0 -> default for the scheme
    use_ssl: bool = Field(False, alias="LDAP_USE_SSL")
    starttls: bool = Field(False, alias="LDAP_STARTTLS")
    tls_validate: bool = Field(False, alias="LDAP_TLS_VALIDATE")
    ca_certs_file: str = Field("", alias="LDAP_CA_CERTS_FILE")
    connect_timeout: float = Field(5.0, alias="LDAP_CONNECT_TIMEOUT")
    operation_timeout: float = Field(10.0, alias="LDAP_OPERATION_TIMEOUT")

    # Service account
    dn_user: str = Field(..., alias="LDAP_DN_USER")
    dn_pass: str = Field(..., alias="LDAP_DN_PASS")
    domain: str = Field(..., alias="LDAP_DOMAIN")

    # Lookup
    basedn: str = Field("", alias="LDAP_BASEDN")
    groupdn: str = Field("", alias="LDAP_GROUPDN")
    attributes: str = Field("samaccountname;displayname;mail;memberof", alias="LDAP_ATTRIBUTES")

    # Authorization (';' separated, DNs may contain commas)
    groups: str = Field("", alias="LDAP_GROUPS")
    admin_groups: str = Field("", alias="LDAP_ADMIN_GROUPS")
    owners: str = Field("", alias="LDAP_OWNERS")
    max_group_depth: int = Field(25, alias="LDAP_MAX_GROUP_DEPTH")

    # Logging
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_dir: str = Field("", alias="LOG_DIR")
    log_retention_days: int = Field(30, alias="LOG_RETENTION_DAYS")

    model_config = SettingsConfigDict(populate_by_name=True, env_file=".env", extra="ignore")

    def directory_config(self) -> DirectoryConfig:
        return DirectoryConfig(
            host=self.host,
            dn_user=self.dn_user,
            dn_pass=self.dn_pass,
            domain=self.domain,
            basedn=self.basedn,
            groupdn=self.groupdn,
            attributes=tuple(split_list(self.attributes)),
            groups=tuple(split_list(self.groups)),
            admin_groups=tuple(split_list(self.admin_groups)),
            owners=tuple(split_list(self.owners)),
            port=self.port or None,
            use_ssl=self.use_ssl,
            starttls=self.starttls,
            tls_validate=self.tls_validate,
            ca_certs_file=self.ca_certs_file,
            connect_timeout=self.connect_timeout,
            operation_timeout=self.operation_timeout,
            max_group_depth=self.max_group_depth,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
