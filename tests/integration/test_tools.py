"""Integration tests for the MCP tool implementations."""

import pytest
import yaml

from duly_noted.constants import GeneratorType
from duly_noted.models import GenerateInput, InitInput, ParseInput, ResolveInput
from duly_noted.tools import dulynoted_generate, dulynoted_init, dulynoted_parse, dulynoted_resolve


@pytest.mark.asyncio
class TestInitTool:
    """Tests for dulynoted_init."""

    async def test_writes_default_config(self, tmp_path):
        """A fresh project gets a duly-noted.yml with defaults."""
        (tmp_path / "README.md").write_text("# Readme")

        result = await dulynoted_init(InitInput(project_path=str(tmp_path), project_name="demo"))

        assert result["status"] == "success"
        assert result["config_file"] == "duly-noted.yml"

        data = yaml.safe_load((tmp_path / "duly-noted.yml").read_text())
        assert data["projectName"] == "demo"
        assert data["outputDir"] == "docs"
        assert data["readme"] == "README.md"
        assert data["generators"] == ["markdown"]

    async def test_existing_config_skipped(self, sample_project):
        """An existing config is not replaced without overwrite."""
        before = (sample_project / "duly-noted.yml").read_text()

        result = await dulynoted_init(InitInput(project_path=str(sample_project)))

        assert result["status"] == "skipped"
        assert (sample_project / "duly-noted.yml").read_text() == before

    async def test_overwrite(self, sample_project):
        result = await dulynoted_init(InitInput(
            project_path=str(sample_project),
            output_dir="site",
            generators=[GeneratorType.HTML],
            overwrite=True,
        ))

        assert result["status"] == "success"
        data = yaml.safe_load((sample_project / "duly-noted.yml").read_text())
        assert data["outputDir"] == "site"
        assert data["generators"] == ["html"]


class TestInputValidation:
    """Tests for the shared input validators."""

    def test_relative_project_path_rejected(self):
        with pytest.raises(ValueError, match="must be absolute"):
            InitInput(project_path="relative/project")

    def test_output_dir_traversal_rejected(self, tmp_path):
        with pytest.raises(ValueError, match="path traversal"):
            InitInput(project_path=str(tmp_path), output_dir="../elsewhere")

    def test_unknown_field_rejected(self, tmp_path):
        with pytest.raises(ValueError):
            ParseInput(project_path=str(tmp_path), verbose=True)


@pytest.mark.asyncio
class TestParseTool:
    """Tests for dulynoted_parse."""

    async def test_parse(self, sample_project):
        result = await dulynoted_parse(ParseInput(project_path=str(sample_project)))

        assert result["status"] == "success"
        assert result["files_parsed"] == 3
        assert result["anchors"] == 3
        assert result["diagnostics"]["total"] == 0
        assert (sample_project / "docs" / ".duly-noted" / "internalReferences.json").exists()

    async def test_strict_fails_on_duplicates(self, sample_project):
        (sample_project / "src" / "extra.ts").write_text("// !connect")

        result = await dulynoted_parse(ParseInput(project_path=str(sample_project), strict=True))

        assert result["status"] == "error"
        assert "StrictModeError" in result["message"]

    async def test_invalid_config(self, sample_project):
        (sample_project / "duly-noted.yml").write_text("anchorRegExp: '!(a)(b)'\n")

        result = await dulynoted_parse(ParseInput(project_path=str(sample_project)))

        assert result["status"] == "error"
        assert "ConfigError" in result["message"]


@pytest.mark.asyncio
class TestGenerateTool:
    """Tests for dulynoted_generate."""

    async def test_parse_first(self, sample_project):
        result = await dulynoted_generate(GenerateInput(
            project_path=str(sample_project),
            generators=[GeneratorType.MARKDOWN],
            parse_first=True,
        ))

        assert result["status"] == "success"
        assert result["parse"]["anchors"] == 3
        assert result["outputs"][0]["index"] == "index.md"
        assert result["diagnostics"]["warnings"] == 1
        assert result["diagnostics"]["issues"][0]["kind"] == "unresolved_link"

    async def test_without_parse_output(self, sample_project):
        result = await dulynoted_generate(GenerateInput(project_path=str(sample_project)))

        assert result["status"] == "error"
        assert "ReferenceDataError" in result["message"]

    async def test_strict_fails_on_unresolved_links(self, sample_project):
        result = await dulynoted_generate(GenerateInput(
            project_path=str(sample_project),
            parse_first=True,
            strict=True,
        ))

        assert result["status"] == "error"
        assert "StrictModeError" in result["message"]
        assert result["diagnostics"]["total"] == 1


@pytest.mark.asyncio
class TestResolveTool:
    """Tests for dulynoted_resolve."""

    async def test_resolves_text(self, sample_project):
        await dulynoted_parse(ParseInput(project_path=str(sample_project)))

        result = await dulynoted_resolve(ResolveInput(
            project_path=str(sample_project),
            text="See @connect and @nowhere.\n!draft",
            file_name="src/main.ts",
        ))

        assert result["status"] == "success"
        assert result["text"] == (
            "See [connect](../src/lib/client.ts.md#connect) and @nowhere.\n"
            '<a name="draft" id="draft" ></a>[🔗draft](#draft)'
        )
        assert result["anchors"] == ["draft"]
        assert result["links"] == ["connect", "nowhere"]
        assert result["diagnostics"]["warnings"] == 1

    async def test_html_syntax(self, sample_project):
        await dulynoted_parse(ParseInput(project_path=str(sample_project)))

        result = await dulynoted_resolve(ResolveInput(
            project_path=str(sample_project),
            text="@mdn/fetch or @retry",
            generator=GeneratorType.HTML,
        ))

        assert result["text"] == (
            "[mdn/fetch](https://developer.mozilla.org/en-US/docs/Web/API/fetch) or "
            "[retry](src/lib/retry.ts.html#retry)"
        )

    async def test_does_not_write(self, sample_project):
        await dulynoted_parse(ParseInput(project_path=str(sample_project)))

        await dulynoted_resolve(ResolveInput(project_path=str(sample_project), text="@retry"))

        assert not (sample_project / "docs" / "index.md").exists()
