"""DictLoader -- in-memory templates without filesystem.

Templates from a dictionary. No templates directory needed.
Use case: tests, generated templates, single-file apps.

Run:
    python app.py
"""

from imprint import DictLoader, Environment

templates = {
    "base.html": """\
<main>
    <header><h1>{{ title }}</h1></header>
    <nav>
    <template type="repeat" repeat="{{ nav_items }}">
        <a href$="{{ item.url }}">{{ item.label }}</a>
    </template>
    </nav>
    <article><template name="content"></template></article>
</main>
""",
    "page.html": """\
<template name="content">
    <h2>{{ heading }}</h2>
    <p>{{ message }}</p>
</template>
""",
}

env = Environment(loader=DictLoader(templates))
template = env.prepare("page.html", extends="base.html")

output = template.render_to_string(
    {
        "title": "DictLoader Demo",
        "nav_items": [
            {"url": "/", "label": "Home"},
            {"url": "/about", "label": "About"},
        ],
        "heading": "In-Memory Templates",
        "message": "No filesystem required. Templates loaded from a dict.",
    }
)


def main() -> None:
    print(output)


if __name__ == "__main__":
    main()
