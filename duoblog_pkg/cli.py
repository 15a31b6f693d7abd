#!/usr/bin/env python3
"""
Command-line interface for Duoblog - multilingual blog builder.
"""

import os
import sys
import time
import shutil
import argparse

from . import __version__
from .core import Duoblog, PACKAGE_TEMPLATES
from .settings import BlogSettings, ConfigError

SAMPLE_POSTS = {
    'en/hello-world.md': """---
title: Hello, world
date: 2024-01-15
tags:
  - news
---

This blog is built with **Duoblog**.

<!-- cut -->

Posts live in `source/<lang>/`. A post with the same file name in another
language is linked as its translation.
""",
    'ru/hello-world.md': """---
title: Привет, мир
date: 2024-01-15
tags:
  - news
---

Этот блог собран с помощью **Duoblog**.
""",
}


def create_starter_structure() -> None:
    """Create the source folders, sample posts and templates."""
    current_dir = os.getcwd()

    for relative_path, content in SAMPLE_POSTS.items():
        post_path = os.path.join(current_dir, 'source', *relative_path.split('/'))
        if os.path.exists(post_path):
            print(f"Sample post already exists: source/{relative_path}")
            continue
        os.makedirs(os.path.dirname(post_path), exist_ok=True)
        with open(post_path, 'w', encoding='utf-8') as f:
            f.write(content)
        print(f"Created sample post: source/{relative_path}")

    template_dest = os.path.join(current_dir, 'templates')
    os.makedirs(template_dest, exist_ok=True)
    for template_file in sorted(os.listdir(PACKAGE_TEMPLATES)):
        dest_path = os.path.join(template_dest, template_file)
        if os.path.exists(dest_path):
            print(f"Template already exists: templates/{template_file}")
        else:
            shutil.copy2(os.path.join(PACKAGE_TEMPLATES, template_file), dest_path)
            print(f"Created template: templates/{template_file}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Duoblog - Multilingual Blog Builder')
    parser.add_argument('--source', type=str,
                        help='Directory containing the source posts')
    parser.add_argument('--templates', type=str,
                        help='Templates directory')
    parser.add_argument('--public', type=str,
                        help='Output directory for the generated site')
    parser.add_argument('--assets', type=str,
                        help='Assets directory to copy to output')
    parser.add_argument('--source-types', type=str,
                        help='Comma-separated list of source file extensions')
    parser.add_argument('--posts-per-page', type=int,
                        help='Number of posts per page for pagination')
    parser.add_argument('--posts-in-feed', type=int,
                        help='Number of posts in the Atom feed')
    parser.add_argument('--site-url', type=str,
                        help='Site URL used in feeds')
    parser.add_argument('--minify', action='store_true', default=None,
                        help='Minify CSS and JS assets')
    parser.add_argument('--init', type=str, choices=['yml', 'yaml', 'json'],
                        help='Create a sample configuration file and starter content')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    return parser


def main(argv=None) -> None:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    if args.init:
        settings_loader = BlogSettings()
        config_path = settings_loader.create_sample_config(args.init)
        print(f"Created sample configuration file: {config_path}")
        create_starter_structure()
        print("\nEdit the configuration file and templates, then run 'duoblog' to build your blog.")
        return

    overall_start_time = time.time()

    try:
        settings_loader = BlogSettings()
        settings_loader.load_settings()
        args_dict = {k: v for k, v in vars(args).items() if v is not None and k != 'init'}
        final_settings = settings_loader.merge_with_args(args_dict)

        generator = Duoblog(final_settings)
        stats = generator.build()
    except (ConfigError, FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    total_time = time.time() - overall_start_time
    generator.logger.info(f"Site build completed in {total_time:.6f} seconds.")
    generator.logger.info(f"Total documents: {stats.documents}, virtual pages: {stats.virtual_documents}")

    if stats.render_errors or stats.write_errors:
        print(f"Error: {stats.render_errors} pages failed to render, {stats.write_errors} failed to write",
              file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()
