import os
import logging
from collections import namedtuple
from datetime import datetime

from . import assets
from .generator import create_template_renderer, generate_pages, save_pages
from .helpers import default_helpers
from .loader import default_field_parsers, load_source_files
from .markdown import create_markdown_renderer, screenshot
from .planner import build_page_plan
from .settings import BlogSettings, translation_map, validate

BuildStats = namedtuple('BuildStats', ['documents', 'virtual_documents', 'pages_written', 'render_errors', 'write_errors'])

PACKAGE_TEMPLATES = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'templates')


class InfoFilter(logging.Filter):
    """Filter to allow only selected INFO messages to be shown in the console."""
    def filter(self, record):
        if record.levelno > logging.INFO:
            return True
        allowed_messages = [
            "Building blog",
            "Loaded",
            "Planned",
            "Copied assets",
            "Minified",
            "Rendered",
            "Wrote",
            "Site build completed in",
            "Total documents",
        ]
        return any(msg in record.getMessage() for msg in allowed_messages)


class Duoblog:
    def __init__(self, settings=None, log_to_file=True):
        self.settings = validate(settings or BlogSettings().load_settings())
        self.translation_map = translation_map(self.settings)
        self.log_to_file = log_to_file
        self.setup_logging()

        self.source_dir = self.settings['source']
        self.output_dir = os.path.expanduser(self.settings['public'])
        self.templates_dir = self.settings['templates']
        # Fall back to the bundled templates when the site has none of its own
        if not os.path.isabs(self.templates_dir) and not os.path.exists(self.templates_dir):
            self.templates_dir = PACKAGE_TEMPLATES

        self.render_markdown = create_markdown_renderer(plugins=[screenshot])
        self.render_template = create_template_renderer(self.templates_dir)
        self.helpers = default_helpers()
        self.field_parsers = default_field_parsers(self.languages)

    @property
    def languages(self):
        langs = list(self.translation_map.languages)
        for lang in [*(self.settings.get('languages') or {}), self.settings['default_lang']]:
            if lang not in langs:
                langs.append(lang)
        return langs

    def setup_logging(self):
        """Set up logging configuration."""
        self.logger = logging.getLogger('Duoblog')
        self.logger.setLevel(logging.DEBUG)

        if not self.logger.handlers:
            # Console handler with filter
            console_handler = logging.StreamHandler()
            console_handler.setLevel(logging.INFO)
            console_handler.addFilter(InfoFilter())
            console_handler.setFormatter(logging.Formatter('%(message)s'))
            self.logger.addHandler(console_handler)

            # File handler for all logs
            if self.log_to_file:
                logs_dir = os.path.join(os.getcwd(), 'logs')
                os.makedirs(logs_dir, exist_ok=True)
                log_filename = datetime.now().strftime('duoblog_%Y-%m-%d_%H-%M-%S.log')
                file_handler = logging.FileHandler(os.path.join(logs_dir, log_filename))
                file_handler.setLevel(logging.DEBUG)
                file_handler.setFormatter(logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))
                self.logger.addHandler(file_handler)

        # Pipeline modules log under the package name
        package_logger = logging.getLogger('duoblog_pkg')
        package_logger.setLevel(logging.DEBUG)
        for handler in self.logger.handlers:
            if handler not in package_logger.handlers:
                package_logger.addHandler(handler)

    def load(self):
        """Load the source documents."""
        return load_source_files(
            self.source_dir,
            self.settings['source_types'],
            renderers={ext: self.render_markdown for ext in self.settings['source_types']},
            field_parsers=self.field_parsers,
            cut_tag=self.settings['cut_tag'],
            languages=self.languages,
            default_lang=self.settings['default_lang'],
        )

    def plan(self, documents):
        """Derive the virtual pages and return everything to render."""
        planned = build_page_plan(
            documents,
            posts_per_page=self.settings['posts_per_page'],
            posts_in_feed=self.settings['posts_in_feed'],
            translation_map=self.translation_map,
        )
        virtual = sum(1 for doc in planned if doc.is_virtual)
        self.logger.info(f"Planned {len(planned) - virtual} documents and {virtual} virtual pages")
        return planned

    def render(self, documents):
        pages, errors = generate_pages(documents, self.settings, self.helpers, self.render_template)
        self.logger.info(f"Rendered {len(pages)} pages")
        return pages, errors

    def save(self, pages):
        written, failed = save_pages(pages, self.output_dir)
        self.logger.info(f"Wrote {written} files to {self.output_dir}")
        return written, failed

    def copy_assets(self):
        assets.copy_assets(self.settings.get('assets'), self.output_dir)
        if self.settings.get('minify'):
            count = assets.minify_assets(self.output_dir)
            self.logger.info(f"Minified {count} asset files")

    def build(self):
        """Main build process."""
        self.logger.info("Building blog...")
        os.makedirs(self.output_dir, exist_ok=True)

        documents = self.load()
        planned = self.plan(documents)
        pages, render_errors = self.render(planned)
        written, write_errors = self.save(pages)
        self.copy_assets()

        return BuildStats(
            documents=len(documents),
            virtual_documents=len(planned) - len(documents),
            pages_written=written,
            render_errors=render_errors,
            write_errors=write_errors,
        )
