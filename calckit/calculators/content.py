"""Help content resolution with generated fallbacks.

Definitions without hand-written help text still get a short "what is"
paragraph and "how to" list built from their title, description, category
and input labels.
"""

import html

from .schemas import CalculatorDefinition, ResolvedContent

# Shorter strings are treated as placeholders
MIN_CONTENT_LENGTH = 10


def is_usable_content(text: object) -> bool:
    """Whether a content section holds real text rather than a placeholder key."""
    if not isinstance(text, str):
        return False
    if ".whatIs" in text or ".howTo" in text:
        return False
    return len(text) > MIN_CONTENT_LENGTH


def fallback_what_is(definition: CalculatorDefinition) -> str:
    title = html.escape(definition.title or definition.id)
    purpose = html.escape(definition.description.rstrip(".").lower())
    return (
        f"<p>The <strong>{title}</strong> is a free online tool that helps you {purpose}.</p>"
        "<p>Simply enter the required values in the fields above, and the calculator "
        "will automatically compute the result for you.</p>"
        f"<p>This calculator is part of our collection of {definition.category.value} "
        "calculators, designed to make complex calculations simple and accessible.</p>"
    )


def fallback_how_to(definition: CalculatorDefinition) -> str:
    labels = ", ".join(html.escape(field.label) for field in definition.inputs)
    listed = f" ({labels})" if labels else ""
    return (
        "<ol>"
        f"<li><strong>Enter the values:</strong> Fill in the required fields{listed}.</li>"
        "<li><strong>View the result:</strong> The calculation is performed automatically as you type.</li>"
        "<li><strong>Copy or share:</strong> Use the buttons to copy the result or share this calculator.</li>"
        "</ol>"
    )


def resolve_content(definition: CalculatorDefinition) -> ResolvedContent:
    """Return the definition's help content, generating missing sections."""
    content = definition.content
    what_is = content.what_is if content else None
    how_to = content.how_to if content else None
    generated: list[str] = []

    if not is_usable_content(what_is):
        what_is = fallback_what_is(definition)
        generated.append("what_is")
    if not is_usable_content(how_to):
        how_to = fallback_how_to(definition)
        generated.append("how_to")

    return ResolvedContent(
        calculator_id=definition.id,
        what_is=what_is,
        how_to=how_to,
        faq=list(content.faq) if content else [],
        generated=generated,
    )
