from __future__ import annotations

import rulesetcfg.errors as E
from rulesetcfg.errors import (
    CLIError,
    ConfigError,
    RulesetConfigError,
    StorageError,
    StorageReadError,
    StorageWriteError,
    format_error,
)


def test_error_hierarchy():
    for cls in (ConfigError, StorageError, StorageReadError, StorageWriteError, CLIError):
        assert issubclass(cls, RulesetConfigError)
    assert issubclass(StorageReadError, StorageError)
    assert issubclass(StorageWriteError, StorageError)
    # typed errors are not ValueErrors; callers catch the specific classes
    assert not issubclass(ConfigError, ValueError)


def test_storage_errors_carry_tier_and_key():
    e = StorageWriteError("boom", tier="local", key="rulesetConfig")
    assert (e.tier, e.key) == ("local", "rulesetConfig")
    assert StorageReadError("x").tier is None


def test_format_error_prefix_and_message():
    assert format_error(ConfigError("bad key 'foo'")) == "ConfigError: bad key 'foo'"
    assert format_error(StorageReadError("")) == "StorageReadError"


def test_all_is_sorted_and_complete():
    assert E.__all__ == sorted(E.__all__)
    for name in E.__all__:
        assert hasattr(E, name)
