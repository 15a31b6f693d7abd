"""
Markdown rendering for Duoblog, built on mistune.

Screenshots are images whose file name starts with a platform token:

    ![](/images/mac__shipit.png "Ship it")

A paragraph holding nothing but such an image is rendered as

    <div class="screenshot screenshot_mac"><img src="/images/mac__shipit.png" alt="Ship it"></div>

The platform token is copied into the markup as is. Sources and templates
live in the same repository, so this is not meant to sanitize untrusted input.
"""

import re

import mistune

DEFAULT_PLUGINS = ['table', 'task_lists', 'strikethrough']

SCREENSHOT_PLATFORM = re.compile(r'/(\w+)__')
# What mistune's HTMLRenderer.image emits for a single image.
LONE_IMAGE = re.compile(r'<img src="(?P<url>[^"]*)" alt="(?P<alt>[^"]*)"(?: title="(?P<title>[^"]*)")? />')


class CustomRenderer(mistune.HTMLRenderer):
    def __init__(self):
        super().__init__(escape=False)

    def block_code(self, code, info=None):
        escaped_code = mistune.escape(code)
        return '<pre style="white-space: pre-wrap;"><code>{}</code></pre>\n'.format(escaped_code)


def render_screenshot(text):
    """Return the screenshot block for a lone platform image, else ``None``."""
    image = LONE_IMAGE.fullmatch(text.strip())
    if not image:
        return None
    platform = SCREENSHOT_PLATFORM.search(image.group('url'))
    if not platform:
        return None
    return '<div class="screenshot screenshot_{}"><img src="{}" alt="{}"></div>\n'.format(
        platform.group(1), image.group('url'), image.group('title') or ''
    )


def screenshot(md):
    """Mistune plugin turning platform screenshots into styled blocks."""
    renderer = md.renderer
    if not renderer or renderer.NAME != 'html':
        return
    paragraph = renderer.paragraph

    # mistune looks renderer methods up on the instance first
    def render_paragraph(text):
        return render_screenshot(text) or paragraph(text)

    renderer.paragraph = render_paragraph


def create_markdown_renderer(plugins=()):
    """Create a Markdown to HTML function.

    ``plugins`` are mistune plugins (names or callables) applied on top of the
    default table, task list and strikethrough support.
    """
    return mistune.create_markdown(
        renderer=CustomRenderer(),
        plugins=DEFAULT_PLUGINS + list(plugins)
    )
