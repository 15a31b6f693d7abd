"""
Static assets: copied into the output as is, optionally minified.
"""

import os
import shutil
import logging

import csscompressor
import rjsmin

logger = logging.getLogger(__name__)


def copy_assets(assets_dir, output_dir):
    """Copy ``assets_dir`` to ``<output_dir>/assets``, replacing an earlier copy."""
    if not assets_dir or not os.path.isdir(assets_dir):
        logger.debug(f"No assets directory to copy ({assets_dir})")
        return None

    output_assets_dir = os.path.join(output_dir, 'assets')
    if os.path.exists(output_assets_dir):
        shutil.rmtree(output_assets_dir)
    shutil.copytree(assets_dir, output_assets_dir)
    logger.info(f"Copied assets from {assets_dir}")
    return output_assets_dir


def _minify_files(directory, extension, minify):
    minified = 0
    for root, dirs, files in os.walk(directory):
        for file in files:
            if not file.endswith(extension) or file.endswith('.min' + extension):
                continue
            path = os.path.join(root, file)
            try:
                with open(path, 'r', encoding='utf-8') as f:
                    source = f.read()
                minified_path = path[:-len(extension)] + '.min' + extension
                with open(minified_path, 'w', encoding='utf-8') as f:
                    f.write(minify(source))
                minified += 1
                logger.debug(f"Minified: {file}")
            except (IOError, OSError, PermissionError) as e:
                logger.error(f"Failed to minify {path}: {e}")
    return minified


def minify_assets(output_dir):
    """Write ``.min.css`` and ``.min.js`` files next to the copied assets."""
    assets_output_dir = os.path.join(output_dir, 'assets')
    if not os.path.isdir(assets_output_dir):
        return 0
    count = _minify_files(assets_output_dir, '.css', csscompressor.compress)
    count += _minify_files(assets_output_dir, '.js', rjsmin.jsmin)
    return count
