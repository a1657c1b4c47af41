"""
install-template - installation guide generator
"""

from .catalog import ConfigError, Platform, Product, load_catalog, parse_catalog
from .generator import GenerationReport, GeneratorContext, render_all, render_doc, run_generate
from .render_context import build_context
from .renderer import DocumentRenderer, RenderError, create_environment
from .resolver import TemplateFinder, TemplateQuery, candidate_templates
from .settings import GeneratorSettings, load_settings
