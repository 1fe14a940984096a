"""Canonical Pydantic models shared across all clientgen modules.

This is the single source of truth for data shapes in the project. Every other
module imports from here rather than defining its own models. The models fall
into four groups:

**Configuration models** -- assembled by the CLI layer and consumed by the
renderers:
    :class:`ClientImportConfig`, :class:`ModelImportConfig`,
    :class:`EnumFetchConfig`, and :class:`CodegenConfig`.

**Endpoint IR** -- produced by the parser, mutated by transform passes and
read by renderers:
    :class:`HTTPMethod`, :class:`ProjectContext`, :class:`EndpointItem`,
    :class:`GeneratorInput`, :class:`PlannedFile`, :class:`RenderOutput`,
    :class:`WriteResult`, :class:`RendererReport`,
    :class:`ExecutionMetrics`, and :class:`ExecutionPlan`.

**Model IR** -- produced by the schema parser and consumed by the model
renderer: :class:`ModelIr`, :class:`ModelNode`, the ``kind`` union
(:class:`InterfaceKind`, :class:`EnumKind`, :class:`AliasKind`) and the
``ModelType`` union.

**Enum metadata documents** -- :class:`EnumPatchDocument` and
:class:`ModelEnumPlan`, whose JSON layout is a file format and therefore
keeps snake_case keys.

Every IR value is built fresh per invocation and discarded afterwards. JSON
snapshots are produced with ``model_dump_json(indent=2)``.
"""

from __future__ import annotations

import enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from clientgen.exceptions import ValidationError


class _ParsableEnum(str, enum.Enum):
    """String enum with a :meth:`parse` that raises the project's ValidationError."""

    @classmethod
    def parse(cls, value: str):  # noqa: ANN206
        """Convert a user-supplied string into a member.

        Raises:
            ValidationError: If *value* matches no member.
        """
        for member in cls:
            if member.value == value:
                return member
        expected = "|".join(m.value for m in cls)
        raise ValidationError(f"Unknown {cls._label()} '{value}', expected {expected}")

    @classmethod
    def _label(cls) -> str:
        return cls.__name__


# --- Configuration ---


class ClientImportMode(_ParsableEnum):
    """Where generated functions import the API client from."""

    GLOBAL = "global"
    LOCAL = "local"
    PACKAGE = "package"

    @classmethod
    def _label(cls) -> str:
        return "client import mode"


class ModelImportType(_ParsableEnum):
    """How generated files import model types."""

    PACKAGE = "package"
    RELATIVE = "relative"

    @classmethod
    def _label(cls) -> str:
        return "model import type"


class ModelRenderStyle(_ParsableEnum):
    """Output style of the model renderer."""

    DECLARATION = "declaration"
    MODULE = "module"

    @classmethod
    def _label(cls) -> str:
        return "model style"


class EnumConflictPolicy(_ParsableEnum):
    """Which source wins when schema and patch metadata disagree."""

    PATCH_FIRST = "patch-first"
    SCHEMA_FIRST = "schema-first"

    @classmethod
    def _label(cls) -> str:
        return "conflict policy"


class NamingStrategy(_ParsableEnum):
    """Whether the enum-patch tool proposes member names."""

    AUTO = "auto"
    NONE = "none"

    @classmethod
    def _label(cls) -> str:
        return "naming strategy"


class ClientImportConfig(BaseModel):
    """Client import settings for the function and hook renderers.

    Example::

        ClientImportConfig(mode="local", client_path="../../api/client")
    """

    mode: ClientImportMode = ClientImportMode.GLOBAL
    client_path: Optional[str] = Field(
        default=None, description="Relative module path used by the local mode"
    )
    client_package: Optional[str] = Field(
        default=None, description="Package name used by the package mode"
    )
    import_name: Optional[str] = Field(
        default=None, description="Name of the client accessor function"
    )


class ModelImportConfig(BaseModel):
    """Model import settings shared by every renderer that references types."""

    import_type: ModelImportType = ModelImportType.RELATIVE
    package_path: Optional[str] = Field(
        default=None, description="Package specifier used by the package style"
    )
    relative_path: Optional[str] = Field(
        default=None, description="Base directory used by the relative style"
    )


class EnumFetchConfig(BaseModel):
    """Options for the enum-patch acquisition tool."""

    base_url: Optional[str] = None
    output: str = "enum-patch.json"
    max_retries: int = Field(default=3, ge=0, description="Total attempts per endpoint")
    timeout_ms: int = Field(default=10_000, gt=0, description="Per-attempt timeout")
    naming_strategy: NamingStrategy = NamingStrategy.AUTO


class CodegenConfig(BaseModel):
    """Project configuration stored in ``./clientgen.json``.

    Every field can be overridden on the command line; a handful can also be
    set through ``CLIENTGEN_*`` environment variables (see
    :func:`clientgen.config.resolve_config`).
    """

    model_config = ConfigDict(extra="forbid")

    input: Optional[str] = Field(
        default=None, description="OpenAPI document: file path, URL, or '-'"
    )
    output: str = Field(default="generated", description="Output directory")
    renderers: list[str] = Field(default_factory=lambda: ["functions"])
    passes: list[str] = Field(
        default_factory=lambda: ["query-classification", "refresh-token-meta"],
        description="Transform passes run after normalization, in order",
    )
    barrel_roots: list[str] = Field(default_factory=list)
    client_import: ClientImportConfig = Field(default_factory=ClientImportConfig)
    model_import: ModelImportConfig = Field(default_factory=ModelImportConfig)
    model_output: Optional[str] = None
    model_style: ModelRenderStyle = ModelRenderStyle.DECLARATION
    enum_patch: Optional[str] = Field(
        default=None, description="EnumPatchDocument applied during model generation"
    )
    conflict_policy: EnumConflictPolicy = EnumConflictPolicy.PATCH_FIRST
    formatter: Optional[list[str]] = Field(
        default=None, description="External formatter command, e.g. ['npx', 'prettier']"
    )
    enum_fetch: EnumFetchConfig = Field(default_factory=EnumFetchConfig)


# --- Endpoint IR ---


class HTTPMethod(str, enum.Enum):
    """HTTP methods the parser extracts, in extraction order."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"


class ProjectContext(BaseModel):
    """Per-run project metadata derived from the document's ``info`` block."""

    package_name: str = "generated"
    api_base_path: Optional[str] = None
    terminals: list[str] = Field(default_factory=list)
    retry_ownership: Optional[str] = None


class EndpointItem(BaseModel):
    """One (path, method) pair with a declared operation.

    ``meta`` is an open extension bag: optional transform passes attach
    business flags there instead of adding fields to this model. Keys read by
    the built-in renderers are defined in :mod:`clientgen.pipeline.transform`.

    With several input slots ``input_type_name`` is only a display name
    (``UpdateOrderInput``); ``input_shape`` holds the inline object type the
    renderers declare, since no model file defines that name.
    """

    namespace: list[str] = Field(default_factory=lambda: ["default"])
    operation_name: str
    export_name: str = ""
    builder_name: str = ""
    summary: Optional[str] = None
    method: str
    path: str
    input_type_name: str = "void"
    input_shape: Optional[str] = None
    output_type_name: str = "void"
    request_body_field: Optional[str] = None
    query_fields: list[str] = Field(default_factory=list)
    path_fields: list[str] = Field(default_factory=list)
    has_request_options: bool = True
    supports_query: bool = False
    supports_mutation: bool = True
    deprecated: bool = False
    meta: dict[str, str] = Field(default_factory=dict)

    @property
    def input_slots(self) -> int:
        """Number of values the caller passes (path + query fields + body)."""
        return (
            len(self.path_fields)
            + len(self.query_fields)
            + (1 if self.request_body_field else 0)
        )


class GeneratorInput(BaseModel):
    """The normalized, renderer-agnostic IR of a whole document."""

    project: ProjectContext = Field(default_factory=ProjectContext)
    endpoints: list[EndpointItem] = Field(default_factory=list)
    model_import: Optional[ModelImportConfig] = None
    client_import: Optional[ClientImportConfig] = None
    output_root: Optional[str] = None


class PlannedFile(BaseModel):
    """A file a renderer wants to exist; path is relative to the output root."""

    path: str
    content: str


class RenderOutput(BaseModel):
    """What a renderer returns."""

    files: list[PlannedFile] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)


class WriteResult(BaseModel):
    """Outcome of a writer run."""

    files_written: list[PlannedFile] = Field(default_factory=list)
    skipped_files: int = 0


class RendererReport(BaseModel):
    """Per-renderer entry of an :class:`ExecutionPlan`."""

    renderer_id: str
    planned_files: int
    warnings: list[str] = Field(default_factory=list)


class ExecutionMetrics(BaseModel):
    """Wall-clock duration of each pipeline phase, in milliseconds."""

    parse_ms: float = 0.0
    transform_ms: float = 0.0
    render_ms: float = 0.0
    layout_ms: float = 0.0
    format_ms: float = 0.0
    write_ms: float = 0.0
    total_ms: float = 0.0


class ExecutionPlan(BaseModel):
    """Audit record of one pipeline run.

    ``planned_files`` holds the files the writer actually wrote (all files
    for the dry-run writer); ``skipped_files`` counts byte-identical files
    left alone. ``layout_files`` is the number of files handed to the writer
    after layout, so ``len(planned_files) + skipped_files == layout_files``.
    """

    endpoint_count: int
    transform_steps: list[str] = Field(default_factory=list)
    renderer_reports: list[RendererReport] = Field(default_factory=list)
    planned_files: list[PlannedFile] = Field(default_factory=list)
    skipped_files: int = 0
    layout_files: int = 0
    metrics: ExecutionMetrics = Field(default_factory=ExecutionMetrics)

    def to_json(self) -> str:
        """Serialise the plan as the pretty-printed execution report."""
        return self.model_dump_json(indent=2)


# --- Model IR ---


class ModelLiteral(BaseModel):
    """A literal value; numbers keep their source text."""

    kind: Literal["string", "number"]
    value: str

    @property
    def key(self) -> str:
        """The value as matched against patch entries."""
        return self.value


class StringType(BaseModel):
    kind: Literal["string"] = "string"


class NumberType(BaseModel):
    kind: Literal["number"] = "number"


class BooleanType(BaseModel):
    kind: Literal["boolean"] = "boolean"


class ObjectType(BaseModel):
    kind: Literal["object"] = "object"


class RefType(BaseModel):
    kind: Literal["ref"] = "ref"
    name: str


class ArrayType(BaseModel):
    kind: Literal["array"] = "array"
    item: ModelType


class UnionType(BaseModel):
    kind: Literal["union"] = "union"
    variants: list[ModelType]


class LiteralType(BaseModel):
    kind: Literal["literal"] = "literal"
    value: ModelLiteral


ModelType = Annotated[
    Union[
        StringType,
        NumberType,
        BooleanType,
        ObjectType,
        RefType,
        ArrayType,
        UnionType,
        LiteralType,
    ],
    Field(discriminator="kind"),
]


class ModelProperty(BaseModel):
    name: str
    description: Optional[str] = None
    required: bool = False
    nullable: bool = False
    type: ModelType


class ModelEnumMember(BaseModel):
    name: str
    value: ModelLiteral
    comment: Optional[str] = None


class InterfaceKind(BaseModel):
    type: Literal["interface"] = "interface"
    properties: list[ModelProperty] = Field(default_factory=list)


class EnumKind(BaseModel):
    type: Literal["enum"] = "enum"
    members: list[ModelEnumMember] = Field(default_factory=list)


class AliasKind(BaseModel):
    type: Literal["alias"] = "alias"
    target: ModelType
    nullable: bool = False


ModelKind = Annotated[
    Union[InterfaceKind, EnumKind, AliasKind],
    Field(discriminator="type"),
]


class ModelNode(BaseModel):
    """One named schema."""

    name: str
    description: Optional[str] = None
    kind: ModelKind


class ModelIr(BaseModel):
    """All named schemas of a document, sorted by name."""

    models: list[ModelNode] = Field(default_factory=list)

    def get(self, name: str) -> Optional[ModelNode]:
        """Return the model called *name*, or ``None``."""
        for model in self.models:
            if model.name == name:
                return model
        return None


ArrayType.model_rebuild()
UnionType.model_rebuild()
ModelProperty.model_rebuild()
AliasKind.model_rebuild()
ModelNode.model_rebuild()


# --- Enum metadata documents ---


ENUM_PATCH_SCHEMA_VERSION = "1"


class EnumPatchMember(BaseModel):
    value: str
    suggested_name: Optional[str] = None
    comment: Optional[str] = None


class EnumPatch(BaseModel):
    """Curated metadata for one enum, matched to schema members by value."""

    enum_name: str
    members: list[EnumPatchMember] = Field(default_factory=list)
    source: Optional[str] = None
    confidence: Optional[float] = None


class EnumPatchDocument(BaseModel):
    """Versioned wrapper written by the acquisition tool.

    Example::

        {
          "schema_version": "1",
          "patches": [
            {
              "enum_name": "Role",
              "members": [{"value": "0", "suggested_name": "Admin", "comment": "Admin"}],
              "source": "materal-api",
              "confidence": 0.7
            }
          ]
        }
    """

    schema_version: str = ENUM_PATCH_SCHEMA_VERSION
    patches: list[EnumPatch] = Field(default_factory=list)


class ModelEnumPlanMember(BaseModel):
    name: str
    value: str
    comment: Optional[str] = None


class ModelEnumPlanItem(BaseModel):
    enum_name: str
    description: Optional[str] = None
    source: str = "openapi"
    members: list[ModelEnumPlanMember] = Field(default_factory=list)


class ModelEnumPlan(BaseModel):
    """Editable listing of every schema enum and its member names."""

    schema_version: str = ENUM_PATCH_SCHEMA_VERSION
    enums: list[ModelEnumPlanItem] = Field(default_factory=list)
