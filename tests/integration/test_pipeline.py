"""
Integration tests for the full pipeline over real source/target directories.
"""

import pytest

from dirender.core.errors import (
    DiscoveryError,
    NoTemplatesError,
    RenderFailures,
    TemplateParseError,
    VariablesParseError,
    VariablesReadError,
)
from dirender.pipeline import run


@pytest.mark.integration
def test_ssh_config_scenario(ssh_source, source_dir, target_dir, settings, compare_text):
    """Host blocks are emitted in mapping order with one line per field."""
    result = run(source_dir, target_dir, settings)

    assert result.rendered == [target_dir / "ssh-config"]
    compare_text((target_dir / "ssh-config").read_text(), ssh_source)


@pytest.mark.integration
def test_incremental_setup(source_dir, target_dir, write_source, settings):
    """Empty source fails, then vars without templates fails, then it succeeds."""
    with pytest.raises(VariablesReadError):
        run(source_dir, target_dir, settings)

    write_source("_vars.yml", "name: world\n")
    with pytest.raises(NoTemplatesError):
        run(source_dir, target_dir, settings)

    write_source("hello.tmpl", "hello {{ name }}\n")
    run(source_dir, target_dir, settings)

    assert (target_dir / "hello").read_text() == "hello world\n"


@pytest.mark.integration
def test_missing_vars_writes_nothing(source_dir, target_dir, write_source, settings):
    write_source("x.tmpl", "static")

    with pytest.raises(VariablesReadError):
        run(source_dir, target_dir, settings)

    assert list(target_dir.iterdir()) == []


@pytest.mark.integration
def test_malformed_vars_writes_nothing(source_dir, target_dir, write_source, settings):
    write_source("_vars.yml", "a: [1, 2\n")
    write_source("x.tmpl", "static")

    with pytest.raises(VariablesParseError):
        run(source_dir, target_dir, settings)

    assert list(target_dir.iterdir()) == []


@pytest.mark.integration
def test_no_templates_writes_nothing(source_dir, target_dir, write_source, settings):
    write_source("_vars.yml", "a: 1\n")
    write_source("readme.txt", "not a template")

    with pytest.raises(NoTemplatesError, match="No template file found"):
        run(source_dir, target_dir, settings)

    assert list(target_dir.iterdir()) == []


@pytest.mark.integration
def test_syntax_error_writes_nothing(source_dir, target_dir, write_source, settings):
    write_source("_vars.yml", "a: 1\n")
    for idx in range(4):
        write_source(f"ok{idx}.tmpl", "{{ a }}")
    write_source("broken.tmpl", "{{ a }")

    with pytest.raises(TemplateParseError) as excinfo:
        run(source_dir, target_dir, settings)

    assert excinfo.value.template_name == "broken.tmpl"
    assert list(target_dir.iterdir()) == []


@pytest.mark.integration
def test_one_render_failure_of_many(source_dir, target_dir, write_source, settings):
    """N-1 outputs are written and only the failing output is reported."""
    write_source("_vars.yml", "service:\n  port: 8080\n")
    for idx in range(5):
        write_source(f"ok{idx}.tmpl", "port={{ service.port }}\n")
    write_source("bad.tmpl", "host={{ service.host.name }}\n")

    with pytest.raises(RenderFailures) as excinfo:
        run(source_dir, target_dir, settings)

    assert excinfo.value.paths == [target_dir / "bad"]
    assert sorted(p.name for p in target_dir.iterdir()) == [f"ok{i}" for i in range(5)]
    assert (target_dir / "ok3").read_text() == "port=8080\n"


@pytest.mark.integration
def test_every_failure_is_reported(source_dir, target_dir, write_source, settings):
    write_source("_vars.yml", "a: 1\n")
    write_source("one.tmpl", "{{ missing }}")
    write_source("two.tmpl", "{{ also_missing }}")
    write_source("three.tmpl", "{{ a }}")

    with pytest.raises(RenderFailures) as excinfo:
        run(source_dir, target_dir, settings)

    assert excinfo.value.paths == [target_dir / "one", target_dir / "two"]
    assert (target_dir / "three").read_text() == "1"


@pytest.mark.integration
def test_runs_are_deterministic(ssh_source, source_dir, tmp_path, settings):
    first = tmp_path / "first"
    second = tmp_path / "second"

    run(source_dir, first, settings)
    run(source_dir, second, settings)
    run(source_dir, second, settings)

    assert (first / "ssh-config").read_bytes() == (second / "ssh-config").read_bytes()


@pytest.mark.integration
def test_templates_can_include_siblings(source_dir, target_dir, write_source, settings):
    write_source("_vars.yml", "name: web\n")
    write_source("_header.txt", "# managed file for {{ name }}\n")
    write_source("app.conf.tmpl", '{% include "_header.txt" %}\nname={{ name }}\n')

    run(source_dir, target_dir, settings)

    assert (target_dir / "app.conf").read_text() == "# managed file for web\nname=web\n"


@pytest.mark.integration
def test_lenient_mode_renders_undefined_empty(source_dir, target_dir, write_source, settings):
    write_source("_vars.yml", "a: 1\n")
    write_source("x.tmpl", "[{{ missing }}]")

    run(source_dir, target_dir, settings.model_copy(update={"strict_undefined": False}))

    assert (target_dir / "x").read_text() == "[]"


@pytest.mark.integration
def test_custom_extension_excludes_vars_file(source_dir, target_dir, write_source, settings):
    write_source("_vars.yml", "port: 9000\n")
    write_source("compose.yml", "port: {{ port }}\n")

    run(source_dir, target_dir, settings.model_copy(update={"template_ext": ".yml"}))

    assert sorted(p.name for p in target_dir.iterdir()) == ["compose"]
    assert (target_dir / "compose").read_text() == "port: 9000\n"


@pytest.mark.integration
def test_invalid_extension_is_discovery_error(source_dir, target_dir, write_source, settings):
    write_source("_vars.yml", "a: 1\n")

    with pytest.raises(DiscoveryError):
        run(source_dir, target_dir, settings.model_copy(update={"template_ext": ".[t]"}))
