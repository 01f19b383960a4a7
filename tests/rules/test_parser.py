"""Tests for steering file parsing (YAML front matter + markdown)."""

from pathlib import Path

import pytest

from kiro_steering.errors import (
    MalformedFrontMatterError,
    PatternSyntaxError,
    UnreadableFileError,
)
from kiro_steering.rules.models import Inclusion
from kiro_steering.rules.parser import parse_steering_file, split_front_matter


def _write(tmp_path: Path, name: str, text: str) -> Path:
    path = tmp_path / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def test_parse_always_rule(tmp_path: Path) -> None:
    path = _write(
        tmp_path,
        "dotnet-style.md",
        "---\n"
        "description: .NET coding standards\n"
        "inclusion: always\n"
        "---\n"
        "\n"
        "Prefer file-scoped namespaces.\n",
    )
    rule = parse_steering_file(path, tmp_path)
    assert rule.id == "dotnet-style"
    assert rule.description == ".NET coding standards"
    assert rule.inclusion == Inclusion.ALWAYS
    assert not rule.patterns
    assert "file-scoped namespaces" in rule.content


def test_parse_comma_separated_quoted_patterns(tmp_path: Path) -> None:
    path = _write(
        tmp_path,
        "blazor.md",
        "---\n"
        "description: Blazor components\n"
        'fileMatchPattern: "*.razor", "*.razor.cs"\n'
        "inclusion: fileMatch\n"
        "---\n"
        "Body\n",
    )
    rule = parse_steering_file(path, tmp_path)
    assert rule.inclusion == Inclusion.FILE_MATCH
    assert rule.patterns.sources == ("*.razor", "*.razor.cs")
    assert rule.applies_to("Counter.razor")
    assert not rule.applies_to("Counter.ts")


def test_parse_bare_star_pattern(tmp_path: Path) -> None:
    path = _write(
        tmp_path,
        "ts.md",
        "---\n"
        "description: TypeScript\n"
        "inclusion: fileMatch\n"
        "fileMatchPattern: *.ts\n"
        "---\n",
    )
    rule = parse_steering_file(path, tmp_path)
    assert rule.patterns.sources == ("*.ts",)


def test_parse_block_list_patterns(tmp_path: Path) -> None:
    path = _write(
        tmp_path,
        "astro.md",
        "---\n"
        "description: Astro pages\n"
        "fileMatchPattern:\n"
        "  - *.astro\n"
        '  - "src/pages/**/*.md"\n'
        "inclusion: fileMatch\n"
        "---\n",
    )
    rule = parse_steering_file(path, tmp_path)
    assert rule.patterns.sources == ("*.astro", "src/pages/**/*.md")


def test_inline_comments_are_not_part_of_patterns(tmp_path: Path) -> None:
    path = _write(
        tmp_path,
        "csharp.md",
        "---\n"
        "description: C# sources\n"
        "inclusion: fileMatch\n"
        'fileMatchPattern: "*.cs", "#notes.md" # C# sources\n'
        "---\n",
    )
    rule = parse_steering_file(path, tmp_path)
    assert rule.patterns.sources == ("*.cs", "#notes.md")
    assert rule.applies_to("src/Program.cs")


def test_inline_comments_in_block_list(tmp_path: Path) -> None:
    path = _write(
        tmp_path,
        "web.md",
        "---\n"
        "description: Web\n"
        "inclusion: fileMatch\n"
        "fileMatchPattern: # page sources\n"
        "  - *.astro # pages\n"
        "  - '*.{ts,tsx}'  # scripts\n"
        "---\n",
    )
    rule = parse_steering_file(path, tmp_path)
    assert rule.patterns.sources == ("*.astro", "*.{ts,tsx}")


def test_parse_manual_rule_ignores_patterns(tmp_path: Path) -> None:
    path = _write(
        tmp_path,
        "release.md",
        "---\n"
        "description: Release checklist\n"
        "inclusion: manual\n"
        'fileMatchPattern: "*.cs"\n'
        "---\n",
    )
    rule = parse_steering_file(path, tmp_path)
    assert rule.inclusion == Inclusion.MANUAL
    assert not rule.patterns
    assert not rule.applies_to("Foo.cs")


def test_inclusion_is_case_insensitive(tmp_path: Path) -> None:
    path = _write(
        tmp_path,
        "mixed.md",
        "---\ndescription: x\ninclusion: FileMatch\nfileMatchPattern: '*.cs'\n---\n",
    )
    assert parse_steering_file(path, tmp_path).inclusion == Inclusion.FILE_MATCH


def test_rule_id_uses_relative_posix_path(tmp_path: Path) -> None:
    path = _write(
        tmp_path,
        "web/astro.md",
        "---\ndescription: Astro\ninclusion: always\n---\n",
    )
    assert parse_steering_file(path, tmp_path).id == "web/astro"


def test_crlf_and_bom_are_accepted(tmp_path: Path) -> None:
    path = tmp_path / "windows.md"
    path.write_bytes(
        "\ufeff---\r\ndescription: Windows\r\ninclusion: always\r\n---\r\nBody\r\n".encode(
            "utf-8"
        )
    )
    rule = parse_steering_file(path, tmp_path)
    assert rule.description == "Windows"


@pytest.mark.parametrize(
    "text, detail",
    [
        ("# No front matter\n", "missing front matter"),
        ("---\ninclusion: always\n---\n", "description"),
        ("---\ndescription: x\n---\n", "inclusion"),
        ("---\ndescription: x\ninclusion: sometimes\n---\n", "unknown inclusion"),
        ("---\ndescription: x\ninclusion: fileMatch\n---\n", "fileMatchPattern"),
        ("---\ndescription: x\ninclusion: fileMatch\nfileMatchPattern: ''\n---\n", "fileMatchPattern"),
        ("---\n- just\n- a list\n---\n", "mapping"),
        ("---\ndescription: [unclosed\ninclusion: always\n---\n", "invalid YAML"),
    ],
)
def test_malformed_front_matter(tmp_path: Path, text: str, detail: str) -> None:
    path = _write(tmp_path, "bad.md", text)
    with pytest.raises(MalformedFrontMatterError) as excinfo:
        parse_steering_file(path, tmp_path)
    assert detail in str(excinfo.value)
    assert excinfo.value.path == path


def test_bad_glob_is_reported_with_path(tmp_path: Path) -> None:
    path = _write(
        tmp_path,
        "broken-glob.md",
        "---\ndescription: x\ninclusion: fileMatch\nfileMatchPattern: '[abc.cs'\n---\n",
    )
    with pytest.raises(PatternSyntaxError) as excinfo:
        parse_steering_file(path, tmp_path)
    assert excinfo.value.path == path


def test_undecodable_file(tmp_path: Path) -> None:
    path = tmp_path / "binary.md"
    path.write_bytes(b"\xff\xfe\x00garbage")
    with pytest.raises(UnreadableFileError):
        parse_steering_file(path, tmp_path)


def test_split_front_matter_without_trailing_newline() -> None:
    block, content = split_front_matter("---\ndescription: x\n---")
    assert block == "description: x"
    assert content == ""
