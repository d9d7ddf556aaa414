"""Markdown rendering and HTML page templates for the preview server."""

import html
import pathlib
from typing import Optional

import markdown
from pygments.formatters import HtmlFormatter
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

from .hub import RELOAD_SENTINEL
from .metadata import TutorialMetadata

HIGHLIGHT_CSS_CLASS = "highlight"
DEFAULT_HIGHLIGHT_STYLE = "default"

MARKDOWN_EXTENSIONS = ["fenced_code", "codehilite", "tables", "nl2br", "toc", "sane_lists"]
MARKDOWN_EXTENSION_CONFIGS = {
    "codehilite": {"css_class": HIGHLIGHT_CSS_CLASS, "guess_lang": False},
}


def render_markdown(text: str) -> str:
    """Convert markdown to an HTML fragment with highlighted code blocks."""
    md = markdown.Markdown(
        extensions=MARKDOWN_EXTENSIONS,
        extension_configs=MARKDOWN_EXTENSION_CONFIGS,
    )
    return md.convert(text)


def highlight_stylesheet(style: str = DEFAULT_HIGHLIGHT_STYLE) -> Optional[str]:
    """Return the pygments CSS for ``style``, or None if it is unknown."""
    try:
        get_style_by_name(style)
    except ClassNotFound:
        return None
    return HtmlFormatter(style=style).get_style_defs(f".{HIGHLIGHT_CSS_CLASS}")


def render_page(
    content: str, tutorial_name: str, metadata: Optional[TutorialMetadata] = None
) -> str:
    """Wrap a rendered fragment in the live preview document."""
    title = html.escape(metadata.name if metadata else tutorial_name)

    meta_parts = []
    if metadata and metadata.category:
        meta_parts.append(f"📁 {html.escape(metadata.category)}")
    if metadata and metadata.description:
        meta_parts.append(f"• {html.escape(metadata.description)}")
    meta_line = "\n      ".join(meta_parts)

    return f"""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>Preview: {title}</title>
  <link rel="stylesheet" href="/highlight/{DEFAULT_HIGHLIGHT_STYLE}.css">
  <link rel="stylesheet" href="/public/styles.css">
</head>
<body>
  <div class="live-indicator">Live Preview</div>

  <div class="header">
    <h1>{title}</h1>
    <div class="meta">
      {meta_line}
    </div>
  </div>

  <div class="container">
    <article class="markdown-body">
      {content}
    </article>
  </div>

  <script>
    // Live reload via Server-Sent Events
    const evtSource = new EventSource('/events');
    evtSource.onmessage = (event) => {{
      if (event.data === '{RELOAD_SENTINEL}') {{
        console.log('Reloading...');
        location.reload();
      }}
    }};

    // Smooth scroll for anchor links
    document.querySelectorAll('a[href^="#"]').forEach(anchor => {{
      anchor.addEventListener('click', function (e) {{
        e.preventDefault();
        const target = document.querySelector(this.getAttribute('href'));
        if (target) {{
          target.scrollIntoView({{ behavior: 'smooth' }});
        }}
      }});
    }});
  </script>
</body>
</html>"""


def render_not_found(readme_path: pathlib.Path, tutorial_name: str) -> str:
    return f"""<!DOCTYPE html>
<html>
  <head><title>Preview - {html.escape(tutorial_name)}</title></head>
  <body style="font-family: system-ui; padding: 2rem; max-width: 800px; margin: 0 auto;">
    <h1>❌ {html.escape(readme_path.name)} not found</h1>
    <p>Expected file: <code>{html.escape(str(readme_path), quote=False)}</code></p>
    <p>Make sure you're running this command from a tutorial directory.</p>
  </body>
</html>"""


def render_error(detail: str) -> str:
    return f"""<!DOCTYPE html>
<html>
  <head><title>Error</title></head>
  <body style="font-family: system-ui; padding: 2rem;">
    <h1>❌ Error rendering preview</h1>
    <pre style="background: #f6f8fa; padding: 1rem; border-radius: 6px;">{html.escape(detail)}</pre>
  </body>
</html>"""
