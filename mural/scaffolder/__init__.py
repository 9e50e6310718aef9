"""mural scaffolder -- renders new projects and apps from built-in templates.

Takes a project name, or an app name plus ``name:type`` attribute tokens,
and produces the fixed file set of a Koa + joiql-mongo + veact project.

Quick usage::

    from mural.scaffolder import FileSystemWriter, Scaffolder

    scaffolder = Scaffolder(FileSystemWriter())
    result = scaffolder.new_app_from_tokens(
        "article", ["title:string", "body:string"], project_dir="./blog"
    )
    print(result.message)
"""

from mural.scaffolder.attributes import (
    Attribute,
    AttributeSchema,
    SchemaDerivation,
    build_query,
    derive_schema,
    parse_attribute,
    parse_attributes,
)
from mural.scaffolder.errors import (
    DuplicateAttributeError,
    InvalidNameError,
    MalformedAttributeError,
    MissingProjectManifestError,
    ScaffoldError,
    TargetExistsError,
)
from mural.scaffolder.generator import ScaffoldPlan, ScaffoldResult, Scaffolder, check_app_name
from mural.scaffolder.manifest import read_project_name
from mural.scaffolder.models import GeneratedFile, ModuleSpec, ProjectSpec
from mural.scaffolder.templates import TemplateRenderer
from mural.scaffolder.writer import FileSystemWriter, MemoryWriter, Writer

__all__ = [
    "Attribute",
    "AttributeSchema",
    "DuplicateAttributeError",
    "FileSystemWriter",
    "GeneratedFile",
    "InvalidNameError",
    "MalformedAttributeError",
    "MemoryWriter",
    "MissingProjectManifestError",
    "ModuleSpec",
    "ProjectSpec",
    "ScaffoldError",
    "ScaffoldPlan",
    "ScaffoldResult",
    "Scaffolder",
    "SchemaDerivation",
    "TargetExistsError",
    "TemplateRenderer",
    "Writer",
    "build_query",
    "check_app_name",
    "derive_schema",
    "parse_attribute",
    "parse_attributes",
    "read_project_name",
]
