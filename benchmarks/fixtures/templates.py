"""Inline template sources shared by the render benchmarks."""

TEMPLATES = {
    "minimal.html": "<p>{{ name }}</p>",
    "small.html": """\
<section>
    <h1>{{ title }}</h1>
    <ul>
    <template type="repeat" repeat="{{ items }}">
        <li data-index$="{{ index }}">{{ item }}</li>
    </template>
    </ul>
    <template type="if" if="{{ footer }}"><footer>{{ footer }}</footer></template>
</section>""",
    "table.html": """\
<table>
<template type="repeat" repeat="{{ rows }}">
    <tr><template type="repeat" repeat="{{ item }}"><td>{{ item }}</td></template></tr>
</template>
</table>""",
    "base.html": """\
<main>
    <header><template name="header">Site</template></header>
    <template name="body"></template>
    <footer><template name="footer">footer</template></footer>
</main>""",
    "section.html": """\
<div class$="section">
    <template name="super"><template name="header">Section</template></template>
</div>""",
    "page.html": """\
<template name="body">
    <h2>{{ title }}</h2>
    <template type="repeat" repeat="{{ items }}"><p>{{ item }}</p></template>
</template>""",
}
