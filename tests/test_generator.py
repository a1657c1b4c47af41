from __future__ import annotations

from pathlib import Path
import io
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout

from core.console import Console
from install_template.src.catalog import Platform, Product
from install_template.src.generator import GeneratorContext, render_all, render_doc, run_generate
from install_template.src.renderer import DocumentRenderer, RenderError, create_environment
from install_template.src.resolver import TemplateFinder
from install_template.src.settings import GeneratorSettings

BODY = "# Installing {{ product.name }} {{ product.version }} on {{ platform.name }}\n"


class GeneratorTests(unittest.TestCase):
    def setUp(self) -> None:
        self.temp_dir = tempfile.TemporaryDirectory()
        root = Path(self.temp_dir.name)
        self.templates = root / "templates"
        self.renders = root / "renders"
        (self.templates / "products" / "foo").mkdir(parents=True)
        self.stdout = io.StringIO()
        self.stderr = io.StringIO()
        self.ctx = self._context(Console(level="info"))
        self.platform = Platform(name="Bar Linux", arch="x86_64", versions=("1",))
        self.product = Product(name="Foo", platforms=(self.platform,))

    def tearDown(self) -> None:
        self.temp_dir.cleanup()

    def _context(self, console: Console) -> GeneratorContext:
        return GeneratorContext(
            console=console,
            settings=GeneratorSettings(templates_dir=self.templates, renders_dir=self.renders),
            finder=TemplateFinder(self.templates, console),
            renderer=DocumentRenderer(create_environment(self.templates), self.renders, console),
        )

    def _template(self, name: str, body: str = BODY) -> None:
        (self.templates / "products" / "foo" / name).write_text(body)

    def _run(self, products):
        with redirect_stdout(self.stdout), redirect_stderr(self.stderr):
            return run_generate(self.ctx, products)

    def test_specific_template_end_to_end(self) -> None:
        self._template("v1_bar-linux_x86_64.njk")
        self.assertEqual(self._run([self.product]), 0)

        output = self.renders / "foo_1_bar-linux_x86_64.mdx"
        self.assertEqual(output.read_text(encoding="utf-8"), "# Installing Foo 1 on Bar Linux\n")
        log = self.stdout.getvalue()
        self.assertIn("Starting render for Foo 1 on Bar Linux x86_64", log)
        self.assertIn('using template "products/foo/v1_bar-linux_x86_64.njk"', log)
        self.assertIn("writing foo_1_bar-linux_x86_64.mdx", log)

    def test_platform_fallback_end_to_end(self) -> None:
        self._template("bar-linux.njk")
        self.assertEqual(self._run([self.product]), 0)

        output = self.renders / "foo_1_bar-linux_x86_64.mdx"
        self.assertTrue(output.is_file())
        self.assertIn('using template "products/foo/bar-linux.njk"', self.stdout.getvalue())

    def test_missing_template_is_skipped(self) -> None:
        self.assertEqual(self._run([self.product]), 0)
        self.assertFalse(self.renders.exists())
        self.assertIn("no template could be found", self.stderr.getvalue())

    def test_missing_template_does_not_stop_other_tuples(self) -> None:
        self._template("v2_bar-linux.njk")
        platform = Platform(name="Bar Linux", arch="x86_64", versions=("1", "2"))
        with redirect_stdout(self.stdout), redirect_stderr(self.stderr):
            report = render_all(self.ctx, [Product(name="Foo", platforms=(platform,))])
        self.assertEqual(report.written, [self.renders / "foo_2_bar-linux_x86_64.mdx"])
        self.assertEqual(report.skipped, [("Foo", "1", "Bar Linux", "x86_64")])

    def test_render_doc_returns_none_without_template(self) -> None:
        with redirect_stdout(self.stdout), redirect_stderr(self.stderr):
            self.assertIsNone(render_doc(self.ctx, self.product, self.platform, "1"))

    def test_rerun_is_idempotent(self) -> None:
        self._template("bar-linux.njk")
        platform = Platform(name="Bar Linux", arch="x86_64", versions=("1", "2"))
        products = [Product(name="Foo", platforms=(platform,))]

        self.assertEqual(self._run(products), 0)
        first = {path.name: path.read_bytes() for path in self.renders.iterdir()}
        self.assertEqual(self._run(products), 0)
        second = {path.name: path.read_bytes() for path in self.renders.iterdir()}

        self.assertEqual(sorted(first), ["foo_1_bar-linux_x86_64.mdx", "foo_2_bar-linux_x86_64.mdx"])
        self.assertEqual(first, second)

    def test_undefined_field_aborts_run(self) -> None:
        self._template("v1_bar-linux.njk", "{{ product.codename }}\n")
        self._template("bar-linux.njk")
        platform = Platform(name="Bar Linux", arch="x86_64", versions=("1", "2"))

        self.assertEqual(self._run([Product(name="Foo", platforms=(platform,))]), 1)

        self.assertFalse((self.renders / "foo_1_bar-linux_x86_64.mdx").exists())
        self.assertFalse((self.renders / "foo_2_bar-linux_x86_64.mdx").exists())
        errors = self.stderr.getvalue()
        self.assertIn("An exception occurred. Details below:", errors)
        self.assertIn("UndefinedError", errors)
        self.assertNotIn("Starting render for Foo 2", self.stdout.getvalue())

    def test_render_all_propagates_render_errors(self) -> None:
        self._template("bar-linux.njk", "{{ platform.kernel }}\n")
        with redirect_stdout(self.stdout), redirect_stderr(self.stderr):
            with self.assertRaises(RenderError):
                render_all(self.ctx, [self.product])

    def test_expansion_type_error_aborts_run(self) -> None:
        self._template("bar-linux.njk", "{{ product.version + 1 }}\n")
        self.assertEqual(self._run([self.product]), 1)
        self.assertFalse(self.renders.exists())
        errors = self.stderr.getvalue()
        self.assertIn("An exception occurred. Details below:", errors)
        self.assertIn("TypeError", errors)

    def test_write_failure_aborts_run(self) -> None:
        self._template("bar-linux.njk")
        self.renders.write_text("not a directory\n")
        self.assertEqual(self._run([self.product]), 1)
        self.assertIn("An exception occurred. Details below:", self.stderr.getvalue())

    def test_unknown_product_filter_is_reported(self) -> None:
        self._template("bar-linux.njk")
        with redirect_stdout(self.stdout), redirect_stderr(self.stderr):
            report = render_all(self.ctx, [self.product], only=["Foo", "Missing DB"])
        self.assertEqual(report.written, [self.renders / "foo_1_bar-linux_x86_64.mdx"])
        self.assertIn("no product named 'missing-db'", self.stderr.getvalue())

    def test_only_filters_products(self) -> None:
        self._template("bar-linux.njk")
        (self.templates / "products" / "other-db").mkdir()
        (self.templates / "products" / "other-db" / "bar-linux.njk").write_text(BODY)
        other = Product(name="Other DB", platforms=(self.platform,))

        with redirect_stdout(self.stdout), redirect_stderr(self.stderr):
            report = render_all(self.ctx, [self.product, other], only=["other db"])
        self.assertEqual(report.written, [self.renders / "other-db_1_bar-linux_x86_64.mdx"])


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
