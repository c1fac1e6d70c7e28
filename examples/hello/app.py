"""Hello World -- the simplest imprint example.

Prepare a template from a string and render it with a model.
No templates directory needed.

Run:
    python app.py
"""

from imprint import Environment

env = Environment()

# Prepare once: placeholders are parsed on first render and reused after
template = env.prepare(env.from_string("<p>Hello, <b>{{ name }}</b>!</p>"))

# Render with a model
output = template.render_to_string({"name": "World"})


def main() -> None:
    print(output)
    print()

    # Multiple renders with different models
    for name in ["Imprint", "Markup", "Python"]:
        print(template.render_to_string({"name": name}))


if __name__ == "__main__":
    main()
