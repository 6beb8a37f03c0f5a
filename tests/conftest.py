from typing import Optional

import pytest


def _poster(name: Optional[str], slug: Optional[str], link: Optional[str]) -> str:
    attrs = ['class="react-component"', 'data-component-class="LazyPoster"']
    for attr, value in (("data-item-name", name), ("data-item-slug", slug), ("data-item-link", link)):
        if value is not None:
            attrs.append(f'{attr}="{value}"')
    return f'<li class="griditem"><div {" ".join(attrs)}><img class="image" alt="" /></div></li>'


def _listing(entries, pages=(), username: str = "floxd") -> str:
    posters = "\n".join(_poster(*entry) for entry in entries)
    links = "\n".join(
        f'<li class="paginate-page"><a href="/{username}/watchlist/page/{page}/">{page}</a></li>'
        for page in pages
    )
    return f"""
<html><body>
<div class="poster-grid"><ul class="grid -p125 -scaled128">
{posters}
</ul></div>
<div class="pagination"><div class="paginate-pages"><ul>
{links}
</ul></div></div>
</body></html>
"""


@pytest.fixture
def listing_html():
    """Builds a watchlist page from (name, slug, link) tuples and pagination page numbers."""
    return _listing
