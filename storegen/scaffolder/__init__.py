"""storegen scaffolder -- composes and writes Pinia/Firestore store files.

Quick usage::

    from storegen.config import Config
    from storegen.scaffolder import StoreGenerator, StoreRequest

    request = StoreRequest.build("shop", ["products", "orders"])
    written = await StoreGenerator(Config()).generate(request)
"""

from storegen.scaffolder.action_module import compose_collection_module
from storegen.scaffolder.email_gen import EmailTemplateGenerator, EmailTemplateOptions
from storegen.scaffolder.functions_gen import CloudFunctionGenerator, CloudFunctionOptions
from storegen.scaffolder.generator import StoreGenerator
from storegen.scaffolder.models import (
    AuthCollectionClassifier,
    CollectionSpec,
    ComposedModule,
    GenerationFlags,
    StoreRequest,
)
from storegen.scaffolder.templates import TemplateRenderer

__all__ = [
    "AuthCollectionClassifier",
    "CloudFunctionGenerator",
    "CloudFunctionOptions",
    "CollectionSpec",
    "ComposedModule",
    "EmailTemplateGenerator",
    "EmailTemplateOptions",
    "GenerationFlags",
    "StoreGenerator",
    "StoreRequest",
    "TemplateRenderer",
    "compose_collection_module",
]
