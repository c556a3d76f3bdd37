from html import escape
from urllib.parse import urlparse

from bizsearch.schemas.search import BusinessRecord, Citation, SearchError, SearchResult
from bizsearch.session import SearchSession

TITLE = "Business Search"

_LINK_SCHEMES = frozenset({"http", "https"})

_STYLE = """
body{font-family:system-ui,sans-serif;max-width:1100px;margin:0 auto;padding:2rem;color:#1f2937}
form.search{display:flex;gap:.5rem;margin-bottom:2rem}
form.search input{flex:1;padding:.75rem;font-size:1rem}
button{padding:.75rem 1.5rem;background:#2563eb;color:#fff;border:0;border-radius:.5rem}
.error{background:#fef2f2;border-left:4px solid #ef4444;padding:1rem;margin-bottom:2rem}
.hint{color:#6b7280}
.cards{display:grid;grid-template-columns:repeat(auto-fill,minmax(300px,1fr));gap:1rem}
.card{border:1px solid #e5e7eb;border-radius:.75rem;padding:1rem}
.badge{background:#eff6ff;color:#2563eb;font-size:.7rem;padding:.2rem .5rem;border-radius:.3rem}
.narrative{white-space:pre-wrap;line-height:1.6}
.sources a{display:block;margin-bottom:.5rem}
"""


def _search_form(industry: str, location: str, loading: bool = False) -> str:
    disabled = " disabled" if loading else ""
    return (
        '<form class="search" method="get" action="/" onsubmit="this.querySelector(\'button\').disabled=true">'
        f'<input type="text" name="industry" placeholder="Industry (e.g. legal, dental, food)" value="{escape(industry)}">'
        f'<input type="text" name="location" placeholder="Street or area (e.g. SS15, Jalan Alor)" value="{escape(location)}">'
        f'<button type="submit"{disabled}>Find businesses</button>'
        "</form>"
    )


def _error_panel(error: SearchError) -> str:
    rows = [
        '<div class="error" role="alert">',
        f"<h4>{escape(error.category.value.replace('_', ' ').capitalize())}</h4>",
        f"<p>{escape(error.message)}</p>",
    ]
    if error.retryable and error.query is not None:
        rows.append(
            '<form method="get" action="/">'
            f'<input type="hidden" name="industry" value="{escape(error.query.industry)}">'
            f'<input type="hidden" name="location" value="{escape(error.query.location)}">'
            '<button type="submit">Retry</button></form>'
        )
    rows.append("</div>")
    return "".join(rows)


def _is_web_url(value: str) -> bool:
    return urlparse(value.strip()).scheme.lower() in _LINK_SCHEMES


def render_business_card(record: BusinessRecord) -> str:
    rows: list[str] = []

    header = f"<h3>{escape(str(record.name or ''))}</h3>"
    if record.industry:
        header += f' <span class="badge">{escape(str(record.industry))}</span>'
    rows.append(header)

    if record.address:
        rows.append(f"<p>\U0001f4cd {escape(str(record.address))}</p>")

    rows.append(f"<p>\u260e\ufe0f {escape(str(record.phone or 'N/A'))}</p>")

    if record.email:
        email = escape(str(record.email))
        rows.append(f'<p>\u2709\ufe0f <a href="mailto:{email}">{email}</a></p>')

    if record.website:
        website = str(record.website)
        label = escape(str(record.website_label))
        if _is_web_url(website):
            rows.append(
                f'<p>\U0001f310 <a href="{escape(website)}" target="_blank" rel="noopener noreferrer">'
                f"{label}</a></p>"
            )
        else:
            rows.append(f"<p>\U0001f310 {label}</p>")

    rows.append(
        f'<p><a href="{escape(record.maps_search_url)}" target="_blank" '
        'rel="noopener noreferrer">View on Map</a></p>'
    )
    return f'<div class="card">{"".join(rows)}</div>'


def render_citation(citation: Citation) -> str:
    uri = escape(citation.uri or "")
    title = escape(citation.title or "Reference link")
    if not citation.uri or not _is_web_url(citation.uri):
        return f"<p><strong>{title}</strong><br><small>{uri}</small></p>"
    return (
        f'<a href="{uri}" target="_blank" rel="noopener noreferrer">'
        f"<strong>{title}</strong><br><small>{uri}</small></a>"
    )


def _result_sections(result: SearchResult, location: str) -> str:
    sections = [
        '<section><h2>Area overview</h2>'
        f'<div class="narrative">{escape(result.narrative_text)}</div></section>'
    ]
    if result.records:
        cards = "".join(render_business_card(r) for r in result.records)
        sections.append(
            f"<section><h2>Results for {escape(location or 'your search')}</h2>"
            f'<div class="cards">{cards}</div></section>'
        )
    if result.citations:
        links = "".join(render_citation(c) for c in result.citations)
        sections.append(
            '<aside class="sources"><h3>Sources</h3>'
            '<p class="hint">Based on live Google Search results. Open a link to check the original source.</p>'
            f"{links}</aside>"
        )
    return "".join(sections)


def render_page(session: SearchSession, hint: str | None = None) -> str:
    body = [
        f"<header><h1>{TITLE}</h1>"
        '<p class="hint">Enter a street, area or industry to find companies in the area.</p></header>',
        _search_form(session.industry, session.location, session.loading),
    ]
    if hint:
        body.append(f'<p class="hint">{escape(hint)}</p>')
    if session.error is not None:
        body.append(_error_panel(session.error))
    elif session.result is not None:
        body.append(_result_sections(session.result, session.location))
    elif not hint:
        body.append('<p class="hint">Enter an industry or location to discover businesses.</p>')

    return (
        "<!DOCTYPE html>"
        f'<html lang="en"><head><meta charset="utf-8"><title>{TITLE}</title>'
        f"<style>{_STYLE}</style></head>"
        f"<body>{''.join(body)}</body></html>"
    )
