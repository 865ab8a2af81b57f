"""Interactive prompt sessions for the three generators.

Each ``ask_*`` function runs one prompt sequence and returns a validated
model.  The line reader is injectable (``ask``) so sessions can be driven by
a scripted list of answers in tests; it defaults to :func:`read_line`.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Callable, Optional

from storegen.errors import InputError
from storegen.scaffolder.email_gen import (
    ALIGNMENTS,
    BORDER_RADII,
    BUTTON_STYLES,
    FONT_OPTIONS,
    HEADER_STYLE_LABELS,
    HEADER_STYLES,
    LAYOUT_STYLE_LABELS,
    LAYOUT_STYLES,
    EmailTemplateOptions,
)
from storegen.scaffolder.functions_gen import CloudFunctionOptions
from storegen.scaffolder.models import AuthCollectionClassifier, StoreRequest
from storegen.utils import console, parse_csv, print_warning, read_line

Ask = Callable[[str], str]


# ---------------------------------------------------------------------------
# Generic questions
# ---------------------------------------------------------------------------


def ask_yes_no(ask: Ask, prompt: str, default: bool) -> bool:
    """Anything but ``y`` (case-insensitive) is no; an empty answer is *default*."""
    answer = ask(prompt).strip().lower()
    if not answer:
        return default
    return answer == "y"


def ask_with_default(ask: Ask, prompt: str, default: str) -> str:
    return ask(prompt).strip() or default


def ask_choice(
    ask: Ask,
    prompt: str,
    options: Sequence[str],
    *,
    labels: Optional[Sequence[str]] = None,
    title: str = "",
) -> str:
    """Numbered menu; an empty, unparsable or out-of-range answer picks the first option."""
    if title:
        console.print(f"\n{title}:")
    for i, label in enumerate(labels or options, start=1):
        console.print(f"{i}. {label}", markup=False)
    answer = ask(prompt).strip() or "1"
    try:
        index = int(answer) - 1
    except ValueError:
        return options[0]
    return options[index] if 0 <= index < len(options) else options[0]


# ---------------------------------------------------------------------------
# Store generator
# ---------------------------------------------------------------------------


def ask_store_request(
    ask: Ask = read_line,
    classifier: Optional[Callable[[str], bool]] = None,
) -> StoreRequest:
    """Collect the store name, collections, roles and logging flag.

    Roles and activity logging are only asked for when at least one
    collection is an authentication collection.

    Raises:
        InputError: Missing store name, no collections, or invalid names.
    """
    classify = classifier or AuthCollectionClassifier()

    store_name = ask("Enter store name (e.g. appStore): ").strip()
    if not store_name:
        raise InputError("Store name is required")

    collections = parse_csv(ask("Enter Firestore collections (comma-separated): "))
    if not collections:
        raise InputError("At least one collection is required")

    roles: list[str] = []
    add_activity_logging = False
    if any(classify(name) for name in collections):
        roles = parse_csv(
            ask("Enter roles for authorization (comma-separated, e.g., admin,editor,user): ")
        )
        add_activity_logging = ask_yes_no(ask, "Add activity logging system? (y/n): ", False)

    return StoreRequest.build(
        store_name,
        collections,
        roles=roles,
        add_activity_logging=add_activity_logging,
        classifier=classify,
    )


# ---------------------------------------------------------------------------
# Email template generator
# ---------------------------------------------------------------------------


def ask_email_options(ask: Ask = read_line) -> EmailTemplateOptions:
    """Collect the design choices of one HTML email template."""
    template_name = ask("Template name (e.g., WelcomeEmail): ").strip()
    if not template_name:
        raise InputError("Template name is required")

    primary = ask_with_default(ask, "Primary color (hex code) [default: #4a86e8]: ", "#4a86e8")
    secondary = ask_with_default(ask, "Secondary color (hex code) [default: #f3f6fc]: ", "#f3f6fc")
    accent = ask_with_default(ask, "Accent color (hex code) [default: #ff7043]: ", "#ff7043")
    text = ask_with_default(ask, "Text color (hex code) [default: #333333]: ", "#333333")
    background = ask_with_default(
        ask, "Background color (hex code) [default: #f7f9fc]: ", "#f7f9fc"
    )

    alignment = ask_with_default(
        ask, "Text alignment (left/center/right) [default: center]: ", "center"
    ).lower()
    if alignment not in ALIGNMENTS:
        print_warning("Invalid alignment. Defaulting to center.")
        alignment = "center"

    font = ask_choice(ask, "Select font (1-5) [default: 1]: ", FONT_OPTIONS, title="Font options")

    radius = ask_with_default(
        ask, "Border radius (none/slight/rounded/pill) [default: rounded]: ", "rounded"
    ).lower()
    if radius not in BORDER_RADII:
        print_warning("Invalid choice. Defaulting to rounded.")
        radius = "rounded"

    button = ask_choice(
        ask, "Select button style (1-5) [default: 1]: ", BUTTON_STYLES, title="Button styles"
    )
    header = ask_choice(
        ask,
        "Select header style (1-3) [default: 1]: ",
        HEADER_STYLES,
        labels=HEADER_STYLE_LABELS,
        title="Header styles",
    )
    layout = ask_choice(
        ask,
        "Select layout style (1-4) [default: 1]: ",
        LAYOUT_STYLES,
        labels=LAYOUT_STYLE_LABELS,
        title="Layout styles",
    )

    return EmailTemplateOptions(
        template_name=template_name,
        primary_color=primary,
        secondary_color=secondary,
        accent_color=accent,
        text_color=text,
        background_color=background,
        alignment=alignment,
        font_family=font,
        border_radius=radius,
        button_style=button,
        header_style=header,
        layout_style=layout,
        include_features=ask_yes_no(ask, "Include features section? (y/n) [y]: ", True),
        include_social=ask_yes_no(ask, "Include social links? (y/n) [y]: ", True),
        include_unsubscribe=ask_yes_no(ask, "Include unsubscribe links? (y/n) [y]: ", True),
    )


# ---------------------------------------------------------------------------
# Cloud Function generator
# ---------------------------------------------------------------------------


def ask_project_dir(ask: Ask = read_line, default: str = "./functions") -> str:
    return ask_with_default(ask, f"Enter project directory [{default}]: ", default)


def ask_function_options(ask: Ask = read_line) -> CloudFunctionOptions:
    """Collect the definition of one HTTPS Cloud Function."""
    function_name = ask("Enter function name (e.g., newApplicantWelcome): ").strip()
    if not function_name:
        raise InputError("Function name is required")

    description = ask_with_default(ask, "Enter function description: ", "Function description")
    is_public = ask_yes_no(ask, "Is this a public function? (y/n) [n]: ", False)
    is_email = ask_yes_no(ask, "Is this an email function? (y/n) [y]: ", True)

    template_name = ""
    subject = ""
    notify_admin = False
    if is_email:
        template_name = ask("Enter email template name (leave blank for custom HTML): ").strip()
        subject = ask("Enter email subject: ").strip()
        notify_admin = ask_yes_no(ask, "Send admin notification? (y/n) [n]: ", False)

    required_fields = parse_csv(ask("Enter required fields (comma-separated): "))
    if not required_fields:
        raise InputError("At least one required field is needed")

    return CloudFunctionOptions(
        function_name=function_name,
        description=description,
        is_public=is_public,
        is_email=is_email,
        template_name=template_name,
        subject=subject,
        notify_admin=notify_admin,
        required_fields=tuple(required_fields),
    )
