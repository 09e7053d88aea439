import html

from ..annotate.sidecar import read_sidecar
from .decorations import DecorationSession, bucket_ranges

PAGE_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
    <meta charset="UTF-8">
    <title>{title}</title>
    <style>
        * { margin: 0; padding: 0; box-sizing: border-box; }
        body {
            font-family: 'SF Mono', 'Fira Code', monospace;
            background: {bg};
            color: {fg};
            padding: 40px;
        }
        h1 { margin-bottom: 20px; font-weight: 400; font-size: 18px; }
        .legend { display: flex; flex-wrap: wrap; gap: 10px; margin-bottom: 30px; }
        .legend-item {
            padding: 4px 12px;
            border-radius: 4px;
            font-size: 12px;
        }
        pre { white-space: pre-wrap; line-height: 1.5; font-size: 14px; }
    </style>
</head>
<body>
    <h1>{title}</h1>
    <div class="legend">
{legend}
    </div>
    <pre>{body}</pre>
</body>
</html>
"""

DARK_PAGE = {"bg": "#0f1115", "fg": "#e6e6e6"}
LIGHT_PAGE = {"bg": "#ffffff", "fg": "#1a1a1a"}


def paint_characters(text, document):
    """Color of the innermost range covering each character (or None).

    Ranges are half-open ``[start.index, end.index)`` and applied in start
    order, so a region nested inside another paints over it.
    """
    spans = []
    for color, ranges in bucket_ranges(document).items():
        for start, end in ranges:
            spans.append((start[2], end[2], color))
    spans.sort(key=lambda span: span[0])

    painted = [None] * len(text)
    for start, end, color in spans:
        for i in range(start, min(end, len(text))):
            painted[i] = color
    return painted


def _legend_items(document, session, dark):
    items = []
    legend = document.get("legend") or {}
    for symbol, spec in (legend.get("symbols") or {}).items():
        if not isinstance(spec, dict):
            continue
        kind = spec.get("kind", "")
        color = spec.get("color")
        style = f' style="background: {session.background(color, dark)}"' if color else ""
        items.append(
            f'        <span class="legend-item"{style}>'
            f"{html.escape(symbol)} {html.escape(str(kind))}</span>"
        )
    return "\n".join(items)


def render_html(text, document, dark=True, title="Annotation Preview"):
    """Render annotated text as a standalone HTML page.

    Args:
        text: The annotated text
        document: Its sidecar document
        dark: Use the dark page colors and translucent backgrounds
        title: Page title

    Returns:
        HTML string
    """
    session = DecorationSession()
    try:
        painted = paint_characters(text, document)

        chunks = []
        run_color = None
        run = []
        for ch, color in zip(text, painted):
            if color != run_color and run:
                chunks.append(_chunk("".join(run), run_color, session, dark))
                run = []
            run_color = color
            run.append(ch)
        if run:
            chunks.append(_chunk("".join(run), run_color, session, dark))

        page = DARK_PAGE if dark else LIGHT_PAGE
        replacements = {
            "{bg}": page["bg"],
            "{fg}": page["fg"],
            "{legend}": _legend_items(document, session, dark),
        }
        out = PAGE_TEMPLATE
        for old, new in replacements.items():
            out = out.replace(old, new)
        out = out.replace("{title}", html.escape(title))
        return out.replace("{body}", "".join(chunks))
    finally:
        session.dispose()


def _chunk(text, color, session, dark):
    escaped = html.escape(text)
    if color is None:
        return escaped
    return f'<span style="background: {session.background(color, dark)}">{escaped}</span>'


def create_html_preview(text_path, output_path, dark=True, ann_path=None):
    """Write an HTML preview for a text file and its sidecar

    Raises:
        FileNotFoundError: if the sidecar is missing or unusable
    """
    document = read_sidecar(text_path, ann_path)
    if document is None:
        raise FileNotFoundError(
            f"No usable annotations for {text_path}; run the annotate command first"
        )

    with open(text_path, encoding="utf-8") as f:
        text = f.read()

    page = render_html(text, document, dark=dark, title=f"Annotations: {text_path}")
    with open(output_path, "w", encoding="utf-8") as f:
        f.write(page)
