from __future__ import annotations

from pathlib import Path

from typer.testing import CliRunner

from htmlsmith.ui.cli import app


DATA = Path(__file__).resolve().parent / "data"


def _invoke(*args: str):
    runner = CliRunner()
    return runner.invoke(app, [str(arg) for arg in args])


def test_render_writes_html_to_stdout() -> None:
    result = _invoke("render", DATA / "001-plain-text.html")

    assert result.exit_code == 0, result.output
    assert "<p>Hello world, this is plain text.</p>" in result.stdout
    assert '<div class="paragraph">' in result.stdout


def test_render_uses_template_directories(templates_dir: Path) -> None:
    result = _invoke("render", DATA / "002-blocks.html", "-t", templates_dir)

    assert result.exit_code == 0, result.output
    assert "<para>Some introduction.</para>" in result.stdout
    assert '<figure class="quote">' in result.stdout


def test_render_writes_output_file(tmp_path: Path, templates_dir: Path) -> None:
    target = tmp_path / "out" / "page.html"

    result = _invoke("render", DATA / "003-anchors.html", "-t", templates_dir, "-o", target)

    assert result.exit_code == 0, result.output
    assert target.exists()
    assert '<A HREF="http://asciidoctor.org">asciidoctor</A>' in target.read_text(encoding="utf-8")
    assert "HTML written to" in result.output


def test_render_engine_bindings_replace_defaults(alt_templates_dir: Path) -> None:
    result = _invoke(
        "render", DATA / "005-img-uri.html", "-t", alt_templates_dir, "-e", "*.xyz=jinja"
    )

    assert result.exit_code == 0, result.output
    assert "<para>An image follows.</para>" in result.stdout
    assert "placeholder.png" not in result.stdout


def test_render_attribute_overrides_document(templates_dir: Path) -> None:
    result = _invoke(
        "render", DATA / "004-attributes.html", "-t", templates_dir, "-a", "imagesdir=media"
    )

    assert result.exit_code == 0, result.output
    assert '<img src="media/source.png" alt="Alt Text Here"/>' in result.stdout


def test_render_markdown_document() -> None:
    result = _invoke("render", DATA / "008-sections.md")

    assert result.exit_code == 0, result.output
    assert "Getting started" in result.stdout
    assert "/assets/chart.png" in result.stdout
    assert '<div class="admonitionblock note">' in result.stdout


def test_render_reads_configuration_file(tmp_path: Path, templates_dir: Path) -> None:
    config = tmp_path / "htmlsmith.yml"
    config.write_text(
        f"template_dirs:\n  - {templates_dir}\nattributes:\n  imagesdir: https://cdn.example\n",
        encoding="utf-8",
    )

    result = _invoke("render", DATA / "004-attributes.html", "-c", config)

    assert result.exit_code == 0, result.output
    assert '<img src="https://cdn.example/source.png" alt="Alt Text Here"/>' in result.stdout


def test_render_rejects_unsupported_inputs(tmp_path: Path) -> None:
    source = tmp_path / "notes.txt"
    source.write_text("plain", encoding="utf-8")

    result = _invoke("render", source)

    assert result.exit_code != 0
    assert "Unsupported input" in result.output


def test_render_reports_invalid_engine_binding(tmp_path: Path) -> None:
    result = _invoke("render", DATA / "001-plain-text.html", "-e", "*.xyz")

    assert result.exit_code != 0
    assert "PATTERN=ENGINE" in result.output


def test_render_reports_template_errors(tmp_path: Path) -> None:
    broken = tmp_path / "paragraph.jinja"
    broken.write_text("{% if %}", encoding="utf-8")

    result = _invoke("render", DATA / "001-plain-text.html", "-t", tmp_path)

    assert result.exit_code == 1
    assert "--debug" in result.output


def test_render_verbose_lists_loaded_templates(templates_dir: Path) -> None:
    result = _invoke("render", DATA / "001-plain-text.html", "-t", templates_dir, "-v")

    assert result.exit_code == 0, result.output
    assert "Loaded template 'paragraph'" in result.output


def test_templates_command_lists_node_types(templates_dir: Path) -> None:
    result = _invoke("templates", "-t", templates_dir)

    assert result.exit_code == 0, result.output
    assert "Template Chains" in result.stdout
    assert "Templated node types:" in result.stdout
    for node_type in ("image", "inline_anchor", "listing", "paragraph", "quote"):
        assert node_type in result.stdout


def test_templates_command_without_sources() -> None:
    result = _invoke("templates")

    assert result.exit_code == 0, result.output
    assert "Templated node types: -" in result.stdout
