"""
Tests for the schema_scaffold command line.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from schema_scaffold import __version__
from schema_scaffold.schema import Datamodel, EnumDefinition, EnumValue, Field, Model
from schema_scaffold.schema_scaffold import schema_scaffold

ROUTE_A = '<Route path="/a" page={APage} name="a" />'

ROUTES_FILE = """const Routes = () => {
  return (
    <Router>
      <Route notfound page={NotFoundPage} />
    </Router>
  )
}
"""

SERVICE_FILE = "api/src/services/posts/posts.js"


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def project(runner, tmp_path):
    """Run the test inside an empty project with formatting disabled."""
    with runner.isolated_filesystem(temp_dir=tmp_path) as directory:
        base = Path(directory)
        (base / "redwood.toml").write_text("[web]\n")
        (base / "scaffold.json").write_text(json.dumps({"formatter": {"enabled": False}}))
        yield base


def invoke(runner, *args):
    return runner.invoke(schema_scaffold, ["--config", "scaffold.json", *args])


class TestVariants:
    """Tests for the variants command."""

    def test_prints_variants(self, runner):
        result = runner.invoke(schema_scaffold, ["variants", "blog_posts"])

        assert result.exit_code == 0
        variants = json.loads(result.output)
        assert variants["pascalName"] == "BlogPosts"
        assert variants["singularParamName"] == "blog-post"
        assert variants["pluralConstantName"] == "BLOG_POSTS"


class TestGenerate:
    """Tests for the generate command."""

    def test_writes_rendered_template(self, runner, project):
        result = invoke(runner, "generate", "service/service.js.template", "posts", SERVICE_FILE)

        assert result.exit_code == 0, result.output
        assert f"Writing `./{SERVICE_FILE}`..." in result.output
        contents = (project / SERVICE_FILE).read_text()
        assert contents.startswith("// schema_scaffold generate service/service.js.template posts ")
        assert "export const createPost = ({ input }) => {" in contents

    def test_existing_file_fails_without_force(self, runner, project):
        invoke(runner, "generate", "service/service.js.template", "posts", SERVICE_FILE)
        (project / SERVICE_FILE).write_text("edited")

        result = invoke(runner, "generate", "service/service.js.template", "posts", SERVICE_FILE)

        assert result.exit_code == 1
        assert "already exists." in result.output
        assert (project / SERVICE_FILE).read_text() == "edited"

        result = invoke(runner, "generate", "--force", "service/service.js.template", "posts", SERVICE_FILE)

        assert result.exit_code == 0, result.output
        assert (project / SERVICE_FILE).read_text() != "edited"

    def test_extra_fields(self, runner, project):
        result = invoke(runner, "generate", "--field", "path=/about-us", "page/route.template", "about", "route.txt")

        assert result.exit_code == 0, result.output
        assert (project / "route.txt").read_text().strip() == (
            '<Route path="/about-us" page={AboutPage} name="about" />'
        )

    def test_bad_field(self, runner, project):
        result = invoke(runner, "generate", "--field", "nope", "page/route.template", "about", "route.txt")

        assert result.exit_code == 2
        assert not (project / "route.txt").exists()

    @pytest.mark.parametrize("key", ["name", "root", "formatter", "config_path", "template_filename"])
    def test_reserved_field(self, runner, project, key):
        result = invoke(runner, "generate", "--field", f"{key}=x", "page/route.template", "about", "route.txt")

        assert result.exit_code == 2
        assert "reserved field name" in result.output
        assert not (project / "route.txt").exists()

    def test_unknown_template(self, runner, project):
        result = invoke(runner, "generate", "page/Missing.js.template", "about", "out.js")

        assert result.exit_code == 1
        assert "Missing.js.template" in result.output

    def test_outside_a_project(self, runner, tmp_path):
        with runner.isolated_filesystem(temp_dir=tmp_path):
            result = runner.invoke(schema_scaffold, ["generate", "page/route.template", "about", "route.txt"])

            assert result.exit_code == 0
            assert "redwood.toml" in result.output
            assert not Path("route.txt").exists()


class TestDestroy:
    """Tests for the destroy command."""

    def test_deletes_generated_file_and_empty_directory(self, runner, project):
        invoke(runner, "generate", "service/service.js.template", "posts", SERVICE_FILE)

        result = invoke(runner, "destroy", SERVICE_FILE)

        assert result.exit_code == 0, result.output
        assert "Destroying `./api/src/services/posts/posts`..." in result.output
        assert not (project / "api" / "src" / "services" / "posts").exists()
        assert (project / "api" / "src" / "services").exists()

    def test_missing_file_is_skipped(self, runner, project):
        result = invoke(runner, "destroy", SERVICE_FILE)

        assert result.exit_code == 0
        assert "File doesn't exist" in result.output


class TestRoutes:
    """Tests for the routes commands."""

    @pytest.fixture
    def routes_file(self, project):
        routes_file = project / "web" / "src" / "Routes.js"
        routes_file.parent.mkdir(parents=True)
        routes_file.write_text(ROUTES_FILE)
        return routes_file

    def test_add_then_remove(self, runner, routes_file):
        result = invoke(runner, "routes", "add", ROUTE_A)

        assert result.exit_code == 0, result.output
        assert ROUTE_A in routes_file.read_text()

        result = invoke(runner, "routes", "remove", "a")

        assert result.exit_code == 0, result.output
        assert routes_file.read_text() == ROUTES_FILE

    def test_missing_routes_file(self, runner, project):
        result = invoke(runner, "routes", "add", ROUTE_A)

        assert result.exit_code == 1
        assert "Routes.js" in result.output


class TestSchema:
    """Tests for the schema command."""

    DATAMODEL = Datamodel(
        models=[Model(name="Post", fields=[Field(name="id", kind="scalar", type="Int", is_id=True)])],
        enums=[EnumDefinition(name="Color", values=[EnumValue(name="RED")])],
    )

    @pytest.fixture(autouse=True)
    def datamodel(self, monkeypatch):
        monkeypatch.setattr("schema_scaffold.schema.get_schema_definitions", lambda paths, introspector=None: self.DATAMODEL)

    def test_prints_model(self, runner, project):
        result = invoke(runner, "schema", "Post")

        assert result.exit_code == 0, result.output
        model = json.loads(result.output)
        assert model["name"] == "Post"
        assert model["fields"][0]["is_id"] is True

    def test_prints_enums(self, runner, project):
        result = invoke(runner, "schema", "--enum")

        assert result.exit_code == 0, result.output
        assert [enum["name"] for enum in json.loads(result.output)] == ["Color"]

    def test_unknown_model(self, runner, project):
        result = invoke(runner, "schema", "Comment")

        assert result.exit_code == 1
        assert "No schema definition found for `Comment` in schema.prisma file" in result.output


class TestRun:
    """Tests for the run command."""

    def test_runs_in_api_directory(self, runner, project):
        (project / "api").mkdir()

        result = invoke(runner, "run", "touch ran.txt", "exit 0")

        assert result.exit_code == 0, result.output
        assert (project / "api" / "ran.txt").exists()
        assert "Running `touch ran.txt`..." in result.output

    def test_stops_at_failing_command(self, runner, project):
        (project / "api").mkdir()

        result = invoke(runner, "run", "exit 4", "touch never.txt")

        assert result.exit_code == 1
        assert "exit code 4" in result.output
        assert not (project / "api" / "never.txt").exists()


def test_version(runner):
    result = runner.invoke(schema_scaffold, ["--version"])

    assert result.exit_code == 0
    assert __version__ in result.output


if __name__ == "__main__":
    pytest.main([__file__])
