"""Template inheritance -- blocks, explicit super and multi-level chains.

A page extends a section layout, which extends the site layout. The
section wraps the site with ``<template name="super">``; the page fills
blocks from both layouts.

Run:
    python app.py
"""

from imprint import TreeBuilder, parse_template, prepare_template

site = parse_template("""\
<div class$="site">
    <header><template name="header">Site</template></header>
    <template name="body"></template>
</div>""")

section = parse_template("""\
<section class$="docs">
    <template name="super">
        <template name="header">Docs</template>
    </template>
</section>""")

page = parse_template("""\
<template name="body">
    <h1>{{ title }}</h1>
    <template type="if" if="{{ draft }}"><em>draft</em></template>
</template>""")

# Ancestors are listed nearest first
prepared = prepare_template(page, extends=[section, site], name="page")

output = prepared.render_to_string({"title": "Getting Started", "draft": True})

# The same prepared template can render into any builder
builder = TreeBuilder()
prepared(builder, {"title": "Tree", "draft": False})
headings = [h1.text_content for h1 in builder.root.find_all("h1")]


def main() -> None:
    print(output)
    print(prepared)
    print("Headings:", headings)


if __name__ == "__main__":
    main()
