"""Shared fixtures for dirender tests."""

from pathlib import Path

import pytest

from dirender.settings import Settings, get_settings

SSH_VARS = """\
# dirender test variables
---
ssh:
  hosts:
    some.host:
      Port: 1234
      Compression: 'no'
      IdentityFile: ~/.ssh/id_ed25519
    another.host:
      User: andreas
"""

SSH_TEMPLATE = """\
{% for host, values in ssh.hosts.items() %}
Host {{ host }}
{% for key, value in values.items() %}
\t{{ key }} {{ value }}
{% endfor %}

{% endfor %}
"""

SSH_EXPECTED = """\
Host some.host
\tPort 1234
\tCompression no
\tIdentityFile ~/.ssh/id_ed25519

Host another.host
\tUser andreas

"""


@pytest.fixture
def source_dir(tmp_path) -> Path:
    path = tmp_path / "source"
    path.mkdir()
    return path


@pytest.fixture
def target_dir(tmp_path) -> Path:
    path = tmp_path / "target"
    path.mkdir()
    return path


@pytest.fixture
def write_source(source_dir):
    """Write a file into the source directory."""

    def _write(name: str, content: str) -> Path:
        path = source_dir / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def settings() -> Settings:
    return Settings(
        vars_file="_vars.yml",
        template_ext=".tmpl",
        max_workers=None,
        file_mode=0o644,
        encoding="utf-8",
        strict_undefined=True,
    )


def compare_text(actual: str, expected: str) -> None:
    """Compare two texts line by line with a readable failure message."""
    actual_lines = actual.split("\n")
    expected_lines = expected.split("\n")
    assert len(actual_lines) == len(expected_lines), (
        f"number of lines differ: actual={len(actual_lines)} "
        f"expected={len(expected_lines)}\nactual:\n{actual}\nexpected:\n{expected}"
    )
    for idx, (a, e) in enumerate(zip(actual_lines, expected_lines)):
        assert a == e, f"line {idx} differs: actual={a!r} expected={e!r}"


@pytest.fixture
def ssh_source(write_source):
    """Source directory holding the SSH hosts variables and template."""
    write_source("_vars.yml", SSH_VARS)
    write_source("ssh-config.tmpl", SSH_TEMPLATE)
    return SSH_EXPECTED


@pytest.fixture(name="compare_text")
def compare_text_fixture():
    return compare_text


@pytest.fixture
def fresh_settings():
    """Re-read DIRENDER_* environment variables on the next get_settings()."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
