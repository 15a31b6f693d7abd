#!/usr/bin/env python3
"""
Settings loader for Duoblog.
Supports configuration from duoblog.yml, duoblog.yaml, or duoblog.json files.
"""

import os
import json
import yaml
from typing import Dict, Any, Optional

from .languages import TranslationMap


class ConfigError(ValueError):
    """Raised when the blog configuration cannot be used."""


class BlogSettings:
    """Load and manage Duoblog configuration settings."""

    # Default configuration
    DEFAULT_SETTINGS = {
        'source': 'source',
        'templates': 'templates',
        'public': 'public',
        'assets': None,
        'source_types': ['md'],
        'posts_per_page': 10,
        'posts_in_feed': 10,
        'cut_tag': '<!-- cut -->',
        'default_lang': 'en',
        'translations': {'en': 'ru', 'ru': 'en'},
        'languages': {},
        'site_url': None,
        'title': None,
        'minify': False,
    }

    # Config file names to look for (in order of preference)
    CONFIG_FILES = ['duoblog.yml', 'duoblog.yaml', 'duoblog.json']

    def __init__(self, config_dir: str = None):
        """
        Initialize settings loader.

        Args:
            config_dir: Directory to look for config files. Defaults to current directory.
        """
        self.config_dir = config_dir or os.getcwd()
        self.settings = self._defaults()
        self.config_file_path = None

    def _defaults(self) -> Dict[str, Any]:
        settings = self.DEFAULT_SETTINGS.copy()
        settings['source_types'] = list(settings['source_types'])
        settings['translations'] = dict(settings['translations'])
        settings['languages'] = {}
        return settings

    def load_settings(self) -> Dict[str, Any]:
        """
        Load settings from configuration file if it exists.

        Returns:
            Dictionary of configuration settings
        """
        config_file = self._find_config_file()

        if config_file:
            self.config_file_path = config_file
            loaded_settings = self._load_config_file(config_file)
            if loaded_settings:
                if not isinstance(loaded_settings, dict):
                    raise ConfigError(f"Configuration file {config_file} must contain a mapping")
                # Merge with defaults, giving preference to loaded settings
                self.settings.update(loaded_settings)

        return self.settings.copy()

    def _find_config_file(self) -> Optional[str]:
        """
        Find the first available configuration file.

        Returns:
            Path to config file or None if not found
        """
        for filename in self.CONFIG_FILES:
            config_path = os.path.join(self.config_dir, filename)
            if os.path.exists(config_path):
                return config_path
        return None

    def _load_config_file(self, config_path: str) -> Dict[str, Any]:
        """
        Load configuration from a file.

        Args:
            config_path: Path to the configuration file

        Returns:
            Dictionary of configuration settings
        """
        file_ext = os.path.splitext(config_path)[1].lower()
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                if file_ext in ['.yml', '.yaml']:
                    return yaml.safe_load(f) or {}
                elif file_ext == '.json':
                    return json.load(f) or {}
                else:
                    raise ConfigError(f"Unsupported config file format: {file_ext}")
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in configuration file {config_path}: {e}")
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in configuration file {config_path}: {e}")

    def create_sample_config(self, file_format: str = 'yml') -> str:
        """
        Create a sample configuration file.

        Args:
            file_format: Format for config file ('yml', 'yaml', or 'json')

        Returns:
            Path to created sample config file
        """
        sample_config = {
            'site_url': 'https://example.com',
            'title': 'My Blog',
            'source': 'source',
            'templates': 'templates',
            'public': 'public',
            'assets': 'assets',
            'posts_per_page': 10,
            'posts_in_feed': 10,
            'cut_tag': '<!-- cut -->',
            'default_lang': 'en',
            'translations': {'en': 'ru', 'ru': 'en'},
            'languages': {
                'en': {'site_url': 'https://example.com', 'title': 'My Blog'},
                'ru': {'site_url': 'https://example.ru', 'title': 'Мой блог'},
            },
            'minify': False,
        }

        filename = f'duoblog.{file_format}'
        config_path = os.path.join(self.config_dir, filename)

        with open(config_path, 'w', encoding='utf-8') as f:
            if file_format in ['yml', 'yaml']:
                f.write("# Duoblog Configuration File\n\n")
                f.write("# Site information\n")
                f.write("site_url: https://example.com\n")
                f.write("title: My Blog\n\n")
                f.write("# Build settings\n")
                f.write("source: source\n")
                f.write("templates: templates\n")
                f.write("public: public\n")
                f.write("assets: assets\n\n")
                f.write("# Content settings\n")
                f.write("posts_per_page: 10\n")
                f.write("posts_in_feed: 10\n")
                f.write("cut_tag: '<!-- cut -->'\n\n")
                f.write("# Languages: each language maps to its translation language\n")
                f.write("default_lang: en\n")
                f.write("translations:\n")
                f.write("  en: ru\n")
                f.write("  ru: en\n")
                f.write("languages:\n")
                f.write("  en:\n")
                f.write("    site_url: https://example.com\n")
                f.write("    title: My Blog\n")
                f.write("  ru:\n")
                f.write("    site_url: https://example.ru\n")
                f.write("    title: Мой блог\n\n")
                f.write("# Development settings\n")
                f.write("minify: false\n")
            elif file_format == 'json':
                json.dump(sample_config, f, indent=2, ensure_ascii=False)
            else:
                raise ConfigError(f"Unsupported config file format: {file_format}")

        return config_path

    def merge_with_args(self, args_dict: Dict[str, Any]) -> Dict[str, Any]:
        """
        Merge configuration settings with command-line arguments.
        Command-line arguments take precedence over config file settings.

        Args:
            args_dict: Dictionary of command-line arguments

        Returns:
            Merged configuration dictionary
        """
        merged = self.settings.copy()

        # Override with non-None command line arguments
        for key, value in args_dict.items():
            if value is not None:
                if key == 'source_types' and isinstance(value, str):
                    # Convert comma-separated string to list
                    merged[key] = [ext.strip().lstrip('.') for ext in value.split(',') if ext.strip()]
                else:
                    merged[key] = value

        return merged


def _is_count(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate(settings: Dict[str, Any]) -> Dict[str, Any]:
    """Fail fast on settings the build cannot work with."""
    posts_per_page = settings.get('posts_per_page')
    if not _is_count(posts_per_page) or posts_per_page < 1:
        raise ConfigError(f"posts_per_page must be a positive integer, got {posts_per_page!r}")

    posts_in_feed = settings.get('posts_in_feed')
    if not _is_count(posts_in_feed) or posts_in_feed < 0:
        raise ConfigError(f"posts_in_feed must be a non-negative integer, got {posts_in_feed!r}")

    if not settings.get('source_types'):
        raise ConfigError("source_types must list at least one file extension")

    languages = settings.get('languages') or {}
    if not isinstance(languages, dict):
        raise ConfigError("languages must map a language tag to its settings")

    translation_map(settings)
    return settings


def translation_map(settings: Dict[str, Any]) -> TranslationMap:
    """Build the translation mapping from the ``translations`` setting."""
    translations = settings.get('translations') or {}
    if not isinstance(translations, dict):
        raise ConfigError("translations must map a language tag to its translation language(s)")
    try:
        return TranslationMap(translations)
    except ValueError as e:
        raise ConfigError(f"Invalid translations setting: {e}")


def for_language(settings: Dict[str, Any], lang: str) -> Dict[str, Any]:
    """Return settings with the overrides of ``lang`` applied.

    ``counterparts`` lists the translation languages of ``lang``.
    """
    merged = settings.copy()
    overrides = (settings.get('languages') or {}).get(lang) or {}
    merged.update(overrides)
    merged['lang'] = lang
    merged['counterparts'] = list(translation_map(settings).counterparts(lang))
    return merged
