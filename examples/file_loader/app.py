"""File-based templates -- the most common real-world pattern.

Loads templates from disk with FileSystemLoader and fills the layout's
named blocks from each page.

Run:
    python app.py
"""

from pathlib import Path

from imprint import Environment, FileSystemLoader

templates_dir = Path(__file__).parent / "templates"
env = Environment(loader=FileSystemLoader(str(templates_dir)))

nav_items = [
    {"url": "/", "label": "Home"},
    {"url": "/about", "label": "About"},
]

# Render both pages on top of the shared layout
home_output = env.render_to_string(
    "home.html",
    {
        "site_name": "My Site",
        "nav_items": nav_items,
        "title": "Welcome",
        "message": "This is an imprint-powered site with template inheritance.",
    },
    extends="layout.html",
)

about_output = env.render_to_string(
    "about.html",
    {
        "site_name": "My Site",
        "nav_items": nav_items,
        "title": "About Us",
        "description": "Built with imprint, a template engine for markup builders.",
        "team": ["Ada", "Grace"],
    },
    extends="layout.html",
)


def main() -> None:
    print("=== Home Page ===")
    print(home_output)
    print()
    print("=== About Page ===")
    print(about_output)
    print()
    print("Templates:", ", ".join(env.list_templates()))


if __name__ == "__main__":
    main()
