"""Per-collection action module composer.

Turns a ``CollectionSpec`` into ``actions/<collection>.js``: a thin module
that lazily builds the shared Firestore action set for the collection and
exposes one forwarding wrapper per entry of the descriptor table.  No CRUD
logic is inlined here; it all lives in ``useFirestoreCollectionActions``.
"""

from __future__ import annotations

from storegen.errors import CompositionError, InvalidCollectionNameError, StoreGenError
from storegen.naming import is_valid_collection_name, js_string

from .descriptors import OperationDescriptor, descriptors_for
from .js_ir import DocComment, ForwardingMember, Import, JsPrinter, LazyFactory, Module
from .models import CollectionSpec, ComposedModule

SHARED_FACTORY = "useFirestoreCollectionActions"
SHARED_FACTORY_MODULE = "../useFirestoreCollectionActions.js"


def compose_collection_module(
    spec: CollectionSpec,
    *,
    extension: str = "js",
    printer: JsPrinter | None = None,
) -> ComposedModule:
    """Compose the action module for one collection.

    The result depends only on ``spec.raw_name``, ``spec.is_auth_collection``
    and the descriptor table.

    Raises:
        InvalidCollectionNameError: If the name is not identifier-safe.
        CompositionError: If rendering fails for any other reason.
    """
    name = spec.raw_name
    if not is_valid_collection_name(name):
        raise InvalidCollectionNameError(name)

    try:
        module = build_collection_module(spec)
        content = (printer or JsPrinter()).render(module)
    except StoreGenError:
        raise
    except Exception as exc:
        raise CompositionError(f"actions/{name}.{extension}", str(exc)) from exc

    return ComposedModule(path=f"actions/{name}.{extension}", content=content)


def build_collection_module(spec: CollectionSpec) -> Module:
    """Build the IR tree for the collection's action module."""
    name = spec.raw_name
    members = tuple(
        _forwarding_member(d, spec) for d in descriptors_for(spec.is_auth_collection)
    )
    factory = LazyFactory(
        name=spec.factory_name,
        params=("state",),
        factory_call=f"{SHARED_FACTORY}({js_string(name)}, state)",
        members=members,
        doc=DocComment(
            lines=(f"Generates a set of Firestore actions scoped to the `{name}` collection.",),
            tags=(
                "@param {Object} state - Pinia store state",
                f"@returns {{Object}} A set of methods to interact with the {name} Firestore collection",
            ),
        ),
        getter_doc=DocComment(
            lines=(f"Lazily initializes and retrieves the {name} collection actions.",),
            tags=(f"@returns {{Object}} Firestore collection methods for '{name}'",),
        ),
    )
    return Module(
        imports=(Import(source=SHARED_FACTORY_MODULE, names=(SHARED_FACTORY,)),),
        body=(factory,),
    )


def _forwarding_member(descriptor: OperationDescriptor, spec: CollectionSpec) -> ForwardingMember:
    return ForwardingMember(
        name=descriptor.member_name(spec.suffix),
        receiver="getActions",
        target=descriptor.key,
        doc=DocComment(
            lines=(descriptor.summary(spec.raw_name),),
            tags=(
                "@function",
                f"@param {{...any}} args - Arguments forwarded to {descriptor.key}",
                "@returns {Promise<any>}",
            ),
        ),
    )
