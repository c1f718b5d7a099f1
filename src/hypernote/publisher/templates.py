"""HTML templates for static site generation.

Uses Jinja2 for templating with inline template definitions.
Templates include: base layout, note page and index page.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from jinja2 import BaseLoader, Environment, select_autoescape
from markupsafe import Markup

if TYPE_CHECKING:
    from ..config import RenderOptions
    from ..models import Note, RenderedNote

UNFILED_FOLDER = "Unfiled"

STYLE = """
body { max-width: 800px; margin: 40px auto; padding: 0 20px;
       font-family: system-ui, -apple-system, sans-serif; line-height: 1.6; color: #374151; }
a { color: #4f46e5; text-decoration: none; }
a:hover { text-decoration: underline; }
.wiki-link { color: #7c3aed; font-weight: 500; }
h1 { border-bottom: 2px solid #e5e7eb; padding-bottom: 0.5rem; }
.meta { display: flex; gap: 1.5rem; color: #6b7280; font-size: 0.875rem; margin-bottom: 2rem; }
blockquote { border-left: 4px solid #d1d5db; margin: 1.5rem 0; color: #6b7280;
             background: #f9fafb; padding: 1rem; border-radius: 0 4px 4px 0; }
code { background: #f3f4f6; padding: 0.2rem 0.4rem; border-radius: 4px;
       font-family: 'Courier New', monospace; font-size: 0.9em; }
pre { background: #1f2937; color: #e5e7eb; padding: 1rem; border-radius: 8px; overflow-x: auto; }
pre code { background: none; color: inherit; padding: 0; }
table { border-collapse: collapse; width: 100%; margin: 1.5rem 0; }
th, td { border: 1px solid #e5e7eb; padding: 0.5rem 1rem; text-align: left; }
th { background: #f9fafb; font-weight: 600; }
.task-list { list-style: none; padding-left: 0; }
.task-list li { display: flex; align-items: flex-start; gap: 0.5rem; }
.task-icon { flex-shrink: 0; margin-top: 0.25rem; }
.task-list li.done { color: #9ca3af; }
hr { border: none; border-top: 1px solid #e5e7eb; margin: 2rem 0; }
.related { margin-top: 3rem; padding-top: 1.5rem; border-top: 1px solid #e5e7eb; }
.related h2 { font-size: 1.1rem; color: #6b7280; margin-top: 0; }
.related ul { list-style: none; padding: 0; }
"""


def _base_wrapper(title: str, content: str) -> str:
    """Wrap content in the base HTML template.

    Plain string formatting keeps Jinja from parsing note HTML that might
    contain {{ }} sequences.
    """
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{_escape_html(title)}</title>
    <style>{STYLE}</style>
</head>
<body>
{content}
</body>
</html>
"""


def _escape_html(text: str) -> str:
    """Escape HTML special characters."""
    return (
        text.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
    )


# Note page - title, dates, rendered content and the link graph panels
NOTE_TEMPLATE = """
<nav><a href="{{ index_url }}">Index</a></nav>
<article class="note">
    <h1>{{ note.title }}</h1>
    <div class="meta">
        <span class="meta-item">Created: {{ note.metadata.created | date }}</span>
        <span class="meta-item">Updated: {{ note.metadata.updated | date }}</span>
        {% if note.folder_name %}<span class="meta-item">{{ note.folder_name }}</span>{% endif %}
    </div>
    <div class="content">
        {{ html_content }}
    </div>
    {% if graph.outgoing %}
    <section class="related related-outgoing">
        <h2>Links</h2>
        <ul>
            {% for target in graph.outgoing %}
            <li><a href="{{ url_for(target.id) }}">{{ target.title }}</a></li>
            {% endfor %}
        </ul>
    </section>
    {% endif %}
    {% if graph.backlinks %}
    <section class="related related-backlinks">
        <h2>Backlinks</h2>
        <ul>
            {% for source in graph.backlinks %}
            <li><a href="{{ url_for(source.id) }}">{{ source.title }}</a></li>
            {% endfor %}
        </ul>
    </section>
    {% endif %}
    {% if graph.two_hop %}
    <section class="related related-two-hop">
        <h2>Related Notes</h2>
        {% for connection in graph.two_hop %}
        <h3>via <a href="{{ url_for(connection.hub.id) }}">{{ connection.hub.title }}</a></h3>
        <ul>
            {% for other in connection.related %}
            <li><a href="{{ url_for(other.id) }}">{{ other.title }}</a></li>
            {% endfor %}
        </ul>
        {% endfor %}
    </section>
    {% endif %}
</article>
"""

# Index page - every note grouped by folder
INDEX_TEMPLATE = """
<div class="index">
    <h1>{{ site_title }}</h1>
    <p class="note-count">{{ note_count }} notes</p>
    {% for folder, notes in folders %}
    <section class="folder">
        <h2>{{ folder }}</h2>
        <ul class="note-list">
            {% for note in notes %}
            <li>
                <a href="{{ url_for(note.id) }}">{{ note.title }}</a>
                <span class="note-date">{{ note.metadata.updated | date }}</span>
            </li>
            {% endfor %}
        </ul>
    </section>
    {% endfor %}
</div>
"""


def _format_date(value) -> str:
    return value.strftime("%Y-%m-%d") if value else ""


def _get_env() -> Environment:
    """Create Jinja2 environment with autoescape enabled."""
    env = Environment(
        loader=BaseLoader(),
        autoescape=select_autoescape(default=True, default_for_string=True),
    )
    env.filters["date"] = _format_date
    return env


def render_note_page(rendered: RenderedNote, options: RenderOptions) -> str:
    """Render a single note page.

    Args:
        rendered: Core output for the note
        options: URL settings shared with the renderer

    Returns:
        Complete HTML page string
    """
    tmpl = _get_env().from_string(NOTE_TEMPLATE)
    content = tmpl.render(
        note=rendered.note,
        graph=rendered.graph,
        url_for=options.note_url,
        index_url=f"{options.base_url}index.html",
        # Already rendered HTML, mark as safe to prevent escaping
        html_content=Markup(rendered.html),
    )
    return _base_wrapper(rendered.note.title, content)


def group_by_folder(notes: Sequence[Note]) -> list[tuple[str, list[Note]]]:
    """Group notes by folder name, folders sorted, unfiled notes last."""
    folders: dict[str, list[Note]] = {}
    for note in notes:
        folders.setdefault(note.folder_name or UNFILED_FOLDER, []).append(note)

    named = sorted(name for name in folders if name != UNFILED_FOLDER)
    if UNFILED_FOLDER in folders:
        named.append(UNFILED_FOLDER)
    return [(name, sorted(folders[name], key=lambda n: n.title.lower())) for name in named]


def render_index_page(notes: Sequence[Note], site_title: str, options: RenderOptions) -> str:
    """Render the index page listing every note by folder."""
    tmpl = _get_env().from_string(INDEX_TEMPLATE)
    content = tmpl.render(
        site_title=site_title,
        note_count=len(notes),
        folders=group_by_folder(notes),
        url_for=options.note_url,
    )
    return _base_wrapper(site_title, content)
