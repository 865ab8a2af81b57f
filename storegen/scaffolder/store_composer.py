"""Cross-collection composers for one store.

Each ``compose_*`` function turns a ``StoreRequest`` into one
``ComposedModule``: the state module, the shared Firestore actions factory,
the store index, the activity logger and the store guide.  Structural parts
of the index (imports, initializers, spreads) are built as IR and printed by
``JsPrinter``; long literal bodies come from the Jinja2 templates under
``templates/store/``.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime
from typing import Any, Optional

from storegen.errors import CompositionError, StoreGenError
from storegen.naming import js_property_key

from .activity import (
    ACTIVITY_COLLECTION,
    ACTIVITY_EVENTS,
    ADMIN_ROLE,
    SYSTEM_ACTOR,
    activity_type,
)
from .auth_flows import AUTH_FLOWS_BY_NAME, RestoreState
from .descriptors import descriptors_for, member_name
from .js_ir import ConstBinding, Import, JsPrinter, Module, Spread
from .models import ComposedModule, StoreRequest
from .templates import TemplateRenderer

GUIDE_TIMESTAMP_FORMAT = "%B %d, %Y at %I:%M %p"

FIREBASE_AUTH_IMPORTS: tuple[str, ...] = (
    "signInWithEmailAndPassword",
    "createUserWithEmailAndPassword",
    "signOut",
    "sendEmailVerification",
    "sendPasswordResetEmail",
    "updateProfile",
    "updatePassword",
    "setPersistence",
    "browserLocalPersistence",
    "reauthenticateWithCredential",
    "EmailAuthProvider",
    "onAuthStateChanged",
)


@contextmanager
def _composing(artifact: str) -> Iterator[None]:
    """Wrap unexpected failures while composing *artifact*."""
    try:
        yield
    except StoreGenError:
        raise
    except Exception as exc:
        raise CompositionError(artifact, str(exc)) from exc


def _file(name: str, extension: str) -> str:
    return f"{name}.{extension}"


# ---------------------------------------------------------------------------
# state.js
# ---------------------------------------------------------------------------


def compose_state(
    request: StoreRequest,
    *,
    renderer: TemplateRenderer,
    extension: str = "js",
) -> ComposedModule:
    """Compose the reactive state module: one ref per collection plus shared fields."""
    path = _file("state", extension)
    with _composing(path):
        content = renderer.render(
            "store/state.js.j2",
            {
                "store_name": request.store_name,
                "store_pascal": request.store_pascal,
                "collections": [{"raw_name": c.raw_name} for c in request.collections],
                "has_auth": bool(request.auth_collections),
                "add_activity_logging": request.flags.add_activity_logging,
            },
        )
    return ComposedModule(path=path, content=content)


# ---------------------------------------------------------------------------
# useFirestoreCollectionActions.js
# ---------------------------------------------------------------------------


def compose_firestore_util(
    request: StoreRequest,
    *,
    renderer: TemplateRenderer,
    extension: str = "js",
) -> ComposedModule:
    """Compose the shared actions factory every collection module delegates to."""
    path = _file("useFirestoreCollectionActions", extension)
    with _composing(path):
        content = renderer.render(
            "store/useFirestoreCollectionActions.js.j2",
            {
                "auth_collection_names": [c.raw_name for c in request.auth_collections],
                "roles": list(request.flags.roles),
                "add_activity_logging": request.flags.add_activity_logging,
                "admin_role": ADMIN_ROLE,
                "events": ACTIVITY_EVENTS,
                "extension": extension,
            },
        )
    return ComposedModule(path=path, content=content)


# ---------------------------------------------------------------------------
# index.js
# ---------------------------------------------------------------------------


def build_index_imports(request: StoreRequest, extension: str = "js") -> Module:
    """Import block of the store index."""
    imports = [
        Import(source="pinia", names=("defineStore",)),
        Import(source=f"./{_file('state', extension)}", default=f"use{request.store_pascal}State"),
    ]
    if request.auth_collections:
        imports.append(Import(source="firebase/auth", names=FIREBASE_AUTH_IMPORTS))
        imports.append(Import(source="@/firebase", names=("auth",)))
    for spec in request.collections:
        imports.append(
            Import(
                source=f"./actions/{_file(spec.raw_name, extension)}",
                names=(spec.factory_name,),
            )
        )
    return Module(imports=tuple(imports))


def build_action_inits(request: StoreRequest) -> list[ConstBinding]:
    """One action-set binding per collection, in input order."""
    return [
        ConstBinding(name=spec.binding, expression=f"{spec.factory_name}(state)")
        for spec in request.collections
    ]


def build_action_spreads(request: StoreRequest) -> list[Spread]:
    return [Spread(name=spec.binding) for spec in request.collections]


def compose_index(
    request: StoreRequest,
    *,
    renderer: TemplateRenderer,
    printer: Optional[JsPrinter] = None,
    extension: str = "js",
) -> ComposedModule:
    """Compose the Pinia store definition.

    The auth flow block is emitted only when the request has at least one
    auth collection; its profile calls go through the primary auth
    collection's action set using member names from the descriptor table.
    """
    path = _file("index", extension)
    printer = printer or JsPrinter()
    with _composing(path):
        primary = request.primary_auth_collection
        context: dict[str, Any] = {
            "store_name": request.store_name,
            "store_pascal": request.store_pascal,
            "imports": printer.render(build_index_imports(request, extension)).rstrip("\n"),
            "action_inits": printer.render_lines(build_action_inits(request), depth=1),
            "spreads": printer.render_lines(build_action_spreads(request), depth=2, separator=",\n"),
            "has_auth": primary is not None,
            "flows": AUTH_FLOWS_BY_NAME,
            "restore_states": [s.value for s in RestoreState],
        }
        if primary is not None:
            context["primary_binding"] = primary.binding
            context["profile"] = {
                key: member_name(key, primary.suffix) for key in ("get", "add", "update")
            }
        content = renderer.render("store/index.js.j2", context)
    return ComposedModule(path=path, content=content)


# ---------------------------------------------------------------------------
# activityLogger.js
# ---------------------------------------------------------------------------


def compose_activity_logger(
    request: StoreRequest,
    *,
    renderer: TemplateRenderer,
    extension: str = "js",
) -> Optional[ComposedModule]:
    """Compose the activity logger, or return ``None`` when logging is off."""
    if not request.flags.add_activity_logging:
        return None
    path = _file("activityLogger", extension)
    with _composing(path):
        examples = [
            activity_type(spec.raw_name, key)
            for spec in request.collections[:1]
            for key in ("add", "update")
        ]
        content = renderer.render(
            "store/activityLogger.js.j2",
            {
                "activity_collection": ACTIVITY_COLLECTION,
                "system_actor": SYSTEM_ACTOR.as_js_fields(),
                "admin_role": ADMIN_ROLE,
                "example_types": [f'"{t}"' for t in examples],
            },
        )
    return ComposedModule(path=path, content=content)


# ---------------------------------------------------------------------------
# STORE_GUIDE.md
# ---------------------------------------------------------------------------


def compose_store_guide(
    request: StoreRequest,
    *,
    renderer: TemplateRenderer,
    now: Optional[datetime] = None,
    stores_dir: str = "stores",
    extension: str = "js",
) -> ComposedModule:
    """Compose the Markdown guide documenting every generated member."""
    path = "STORE_GUIDE.md"
    with _composing(path):
        generated_at = (now or datetime.now()).strftime(GUIDE_TIMESTAMP_FORMAT)
        collections = []
        for spec in request.collections:
            logged = (
                [
                    activity_type(spec.raw_name, key)
                    for key in ACTIVITY_EVENTS
                    if spec.is_auth_collection or key not in ("assignRoles", "revokeRoles")
                ]
                if request.flags.add_activity_logging
                else []
            )
            collections.append(
                {
                    "raw_name": spec.raw_name,
                    "suffix": spec.suffix,
                    "key": js_property_key(spec.raw_name),
                    "is_auth": spec.is_auth_collection,
                    "actions": [
                        {
                            "member": d.member_name(spec.suffix),
                            "signature": d.signature,
                            "note": d.guide_note,
                        }
                        for d in descriptors_for(spec.is_auth_collection)
                    ],
                    "activity_types": logged,
                }
            )
        primary = request.primary_auth_collection
        content = renderer.render(
            "store/STORE_GUIDE.md.j2",
            {
                "store_name": request.store_name,
                "store_pascal": request.store_pascal,
                "generated_at": generated_at,
                "stores_dir": stores_dir,
                "extension": extension,
                "collections": collections,
                "has_auth": primary is not None,
                "primary_auth": primary.raw_name if primary else "",
                "roles": list(request.flags.roles),
                "admin_role": ADMIN_ROLE,
                "add_activity_logging": request.flags.add_activity_logging,
                "activity_collection": ACTIVITY_COLLECTION,
            },
        )
    return ComposedModule(path=path, content=content)
