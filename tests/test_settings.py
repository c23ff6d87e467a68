from __future__ import annotations

import pytest

from ad_auth.ad_utils import bind_principal, domain_to_base_dn, group_dn, host_to_url, split_list
from ad_auth.ad.utils import equality_filter, escape_ldap_filter_value
from ad_auth.settings import Settings


@pytest.fixture
def env(monkeypatch):
    monkeypatch.setenv("LDAP_HOST", "dc01.corp.example")
    monkeypatch.setenv("LDAP_DN_USER", "svc-auth")
    monkeypatch.setenv("LDAP_DN_PASS", "svc-secret")
    monkeypatch.setenv("LDAP_DOMAIN", "corp.example")
    for name in ("LDAP_BASEDN", "LDAP_GROUPDN", "LDAP_GROUPS", "LDAP_ADMIN_GROUPS", "LDAP_OWNERS", "LDAP_PORT"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_directory_config_defaults(env):
    cfg = Settings(_env_file=None).directory_config()
    assert cfg.url == "ldap://dc01.corp.example"
    assert cfg.port is None
    assert cfg.bind_principal == "svc-auth@corp.example"
    assert cfg.base_dn == "DC=corp,DC=example"
    assert cfg.group_base_dn == "DC=corp,DC=example"
    assert cfg.attributes == ("samaccountname", "displayname", "mail", "memberof")
    assert cfg.groups == ()
    assert cfg.max_group_depth == 25


def test_directory_config_lists(env):
    env.setenv("LDAP_GROUPS", "Staff; Contractors")
    env.setenv("LDAP_ADMIN_GROUPS", "IT")
    env.setenv("LDAP_OWNERS", "boss;;")
    env.setenv("LDAP_GROUPDN", "OU=Groups,DC=corp,DC=example")
    env.setenv("LDAP_PORT", "636")
    cfg = Settings(_env_file=None).directory_config()
    assert cfg.groups == ("Staff", "Contractors")
    assert cfg.admin_groups == ("IT",)
    assert cfg.owners == ("boss",)
    assert cfg.group_base_dn == "OU=Groups,DC=corp,DC=example"
    assert cfg.port == 636


def test_directory_config_is_immutable(env):
    cfg = Settings(_env_file=None).directory_config()
    with pytest.raises(AttributeError):
        cfg.host = "other"


def test_config_repr_hides_secret(env):
    assert "svc-secret" not in repr(Settings(_env_file=None).directory_config())


def test_missing_host(env):
    env.delenv("LDAP_HOST")
    with pytest.raises(ValueError):
        Settings(_env_file=None)


@pytest.mark.parametrize("user,domain,expected", [
    ("svc", "corp.example", "svc@corp.example"),
    ("svc@other.example", "corp.example", "svc@other.example"),
    ("CN=svc,OU=Service,DC=corp,DC=example", "corp.example", "CN=svc,OU=Service,DC=corp,DC=example"),
    ("svc", "", "svc"),
    ("", "corp.example", ""),
])
def test_bind_principal(user, domain, expected):
    assert bind_principal(user, domain) == expected


def test_host_to_url():
    assert host_to_url("dc01") == "ldap://dc01"
    assert host_to_url("dc01:3268") == "ldap://dc01:3268"
    assert host_to_url("dc01", use_ssl=True) == "ldaps://dc01"
    assert host_to_url("ldaps://dc01:636") == "ldaps://dc01:636"
    assert host_to_url("") == ""


def test_domain_to_base_dn():
    assert domain_to_base_dn("corp.example.") == "DC=corp,DC=example"
    assert domain_to_base_dn("localhost") == ""


def test_group_dn():
    assert group_dn("Staff", "OU=Groups,DC=corp") == "CN=Staff,OU=Groups,DC=corp"
    assert group_dn("Staff", "") == "CN=Staff"


def test_split_list():
    assert split_list(" a ; b;;c ") == ["a", "b", "c"]
    assert split_list("") == []


def test_escape_ldap_filter_value():
    assert escape_ldap_filter_value("a*b(c)d\\e\x00") == "a\\2ab\\28c\\29d\\5ce\\00"
    assert escape_ldap_filter_value("jsmith") == "jsmith"


def test_equality_filter():
    assert equality_filter("samaccountname", "*") == "(samaccountname=\\2a)"


def test_settings_by_alias_or_field_name(env):
    env.setenv("AUTH_REMOTE_USER_HEADER", "X-Forwarded-User")
    env.setenv("SOME_UNRELATED_VAR", "1")
    assert Settings(_env_file=None).remote_user_header == "X-Forwarded-User"
    assert Settings(_env_file=None, remote_user_header="X-Remote-User").remote_user_header == "X-Remote-User"
    assert Settings.model_config["extra"] == "ignore"


def test_remote_user_header_off_by_default(env):
    env.delenv("AUTH_REMOTE_USER_HEADER", raising=False)
    assert Settings(_env_file=None).remote_user_header == ""
