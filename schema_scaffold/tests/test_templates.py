"""
Tests for template rendering and formatting.
"""

from __future__ import annotations

import jinja2
import pytest

from schema_scaffold.config import FormatterConfig
from schema_scaffold.formatters import Formatter, PrettierFormatter, parser_for_filename
from schema_scaffold.paths import ProjectPaths
from schema_scaffold.templates import generate_template, prettier_config_path, prettify, transform_ts_to_js


class RecordingFormatter(Formatter):
    """Formatter recording its calls and tagging the code it formats."""

    def __init__(self):
        self.calls = []

    def is_available(self) -> bool:
        return True

    def format(self, code, parser, config_path=None):
        self.calls.append((parser, config_path))
        return f"/* {parser} */\n{code}"


class TestParserForFilename:
    """Tests for extension to parser mapping."""

    @pytest.mark.parametrize(
        "filename, parser",
        [
            ("Page.js.template", "babel"),
            ("Page.ts.template", "babel-ts"),
            ("styles.css.template", "css"),
            ("Page.js", "babel"),
            ("Page.tsx.template", None),
            ("README.md.template", None),
        ],
    )
    def test_parser(self, filename, parser):
        assert parser_for_filename(filename) == parser


class TestPrettify:
    """Tests for prettify."""

    def test_formats_known_extension(self, tmp_path):
        formatter = RecordingFormatter()
        config = tmp_path / "prettier.config.js"

        result = prettify("Page.ts.template", "const a = 1", formatter, config)

        assert result == "/* babel-ts */\nconst a = 1"
        assert formatter.calls == [("babel-ts", config)]

    def test_unknown_extension_passes_through(self):
        formatter = RecordingFormatter()

        assert prettify("schema.graphql.template", "type Post {}", formatter) == "type Post {}"
        assert formatter.calls == []

    def test_disabled_prettier_returns_code(self):
        formatter = PrettierFormatter(FormatterConfig(enabled=False))

        assert prettify("Page.js.template", "const   a=1", formatter) == "const   a=1"

    def test_missing_prettier_returns_code(self):
        formatter = PrettierFormatter(FormatterConfig(command=["schema-scaffold-missing-prettier"]))

        assert not formatter.is_available()
        assert formatter.format("const   a=1", "babel") == "const   a=1"


class TestGenerateTemplate:
    """Tests for generate_template."""

    def test_renders_name_variants_and_fields(self, tmp_path):
        (tmp_path / "Thing.js.template").write_text("export const {{ pluralCamelName }} = '{{ name }}/{{ extra }}'\n")
        formatter = RecordingFormatter()

        result = generate_template("Thing.js.template", "blog_post", root=tmp_path, formatter=formatter, extra="x")

        assert result == "/* babel */\nexport const blogPosts = 'blog_post/x'\n"

    def test_fields_override_variants(self, tmp_path):
        (tmp_path / "Thing.md.template").write_text("{{ singularCamelName }}")

        result = generate_template("Thing.md.template", "post", root=tmp_path, singularCamelName="custom")

        assert result == "custom"

    def test_undefined_variable_raises(self, tmp_path):
        (tmp_path / "Thing.md.template").write_text("{{ missing }}")

        with pytest.raises(jinja2.UndefinedError):
            generate_template("Thing.md.template", "post", root=tmp_path)

    def test_missing_template_raises(self, tmp_path):
        with pytest.raises(jinja2.TemplateNotFound):
            generate_template("Nope.js.template", "post", root=tmp_path, formatter=RecordingFormatter())

    def test_packaged_service_template(self):
        formatter = PrettierFormatter(FormatterConfig(enabled=False))

        result = generate_template("service/service.js.template", "posts", formatter=formatter)

        assert "export const posts = () => {" in result
        assert "return db.post.findMany()" in result
        assert "export const createPost = ({ input }) => {" in result

    def test_packaged_page_template(self):
        formatter = RecordingFormatter()

        result = generate_template("page/Page.js.template", "about", formatter=formatter, command_line="gen page about")

        assert "// gen page about\n" in result
        assert "const AboutPage = () => {" in result
        assert "<Link to={routes.about()}>About</Link>" in result
        assert formatter.calls == [("babel", None)]

    def test_packaged_constants_template(self):
        result = generate_template("service/constants.ts.template", "user_profiles", formatter=RecordingFormatter())

        assert "export const USER_PROFILES_PATH = '/user-profiles'" in result
        assert "export const USER_PROFILE_PATH = '/user-profiles/:id'" in result

    def test_packaged_route_template(self):
        result = generate_template("page/route.template", "about")

        assert result.strip() == '<Route path="/about" page={AboutPage} name="about" />'

    def test_packaged_route_template_with_path(self):
        result = generate_template("page/route.template", "about", path="/about-us")

        assert result.strip() == '<Route path="/about-us" page={AboutPage} name="about" />'


class TestTransformTsToJs:
    """Tests for transform_ts_to_js."""

    def test_formats_result_as_javascript(self, monkeypatch):
        seen = {}

        def fake_run_node_script(script, stdin, cwd=None, timeout=60):
            seen["stdin"] = stdin
            return "const a = 1\n"

        monkeypatch.setattr("schema_scaffold.templates.run_node_script", fake_run_node_script)
        formatter = RecordingFormatter()

        result = transform_ts_to_js("Thing.ts", "const a: number = 1\n", formatter=formatter)

        assert result == "/* babel */\nconst a = 1\n"
        assert '"filename": "Thing.ts"' in seen["stdin"]


class TestPrettierConfigPath:
    """Tests for prettier_config_path."""

    def test_missing_config_means_defaults(self, tmp_path):
        assert prettier_config_path(ProjectPaths.from_base(tmp_path)) is None

    def test_existing_config(self, tmp_path):
        (tmp_path / "prettier.config.js").write_text("module.exports = {}\n")

        assert prettier_config_path(ProjectPaths.from_base(tmp_path)) == tmp_path.resolve() / "prettier.config.js"


if __name__ == "__main__":
    pytest.main([__file__])
