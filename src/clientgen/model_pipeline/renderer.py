"""Render the model IR as TypeScript declaration or module files.

Two styles are supported:

* **declaration** -- ambient globals: ``declare interface`` and
  ``declare type`` in ``Name.d.ts``. Enums still get a regular
  ``export enum`` in ``Name.ts``, since ambient enums have no runtime value.
* **module** -- ``export interface`` / ``export type`` / ``export enum`` in
  ``Name.ts``. References to other models are written as
  ``import("./Other").Other`` type expressions so model files never import
  each other statically.
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from typing import Optional

from clientgen.models import (
    AliasKind,
    ArrayType,
    EnumKind,
    InterfaceKind,
    LiteralType,
    ModelIr,
    ModelLiteral,
    ModelNode,
    ModelRenderStyle,
    ModelType,
    PlannedFile,
    RefType,
    UnionType,
)
from clientgen.renderers.request import doc_comment_text
from clientgen.renderers.templating import create_environment
from clientgen.renderers.type_utils import is_identifier_type


def render_model_files(
    ir: ModelIr,
    style: ModelRenderStyle,
    only_names: Optional[Iterable[str]] = None,
) -> list[PlannedFile]:
    """Plan one file per model.

    Args:
        ir: The model IR.
        style: Declaration or module output.
        only_names: When given and non-empty, render only these models.

    Returns:
        Planned files in model-name order, paths relative to the model
        output directory.
    """
    allowed = set(only_names or [])
    template = create_environment().get_template("model.ts.j2")

    files = []
    for model in ir.models:
        if allowed and model.name not in allowed:
            continue
        files.append(PlannedFile(
            path=model_file_name(model, style),
            content=template.render(**_model_context(model, style)),
        ))
    return files


def model_file_name(model: ModelNode, style: ModelRenderStyle) -> str:
    if style == ModelRenderStyle.DECLARATION and not isinstance(model.kind, EnumKind):
        return f"{model.name}.d.ts"
    return f"{model.name}.ts"


def render_type(
    model_type: ModelType,
    style: ModelRenderStyle,
    current_model: str,
    nullable: bool = False,
) -> str:
    """TypeScript text for *model_type* as it appears inside *current_model*."""
    if isinstance(model_type, RefType):
        if style == ModelRenderStyle.MODULE and model_type.name != current_model:
            text = f'import("./{model_type.name}").{model_type.name}'
        else:
            text = model_type.name
    elif isinstance(model_type, ArrayType):
        text = f"Array<{render_type(model_type.item, style, current_model)}>"
    elif isinstance(model_type, UnionType):
        text = " | ".join(render_type(v, style, current_model) for v in model_type.variants)
    elif isinstance(model_type, LiteralType):
        text = render_literal(model_type.value)
    else:
        text = model_type.kind

    if nullable:
        return f"{text} | null"
    return text


def render_literal(literal: ModelLiteral) -> str:
    if literal.kind == "string":
        return json.dumps(literal.value, ensure_ascii=False)
    return literal.value


def _model_context(model: ModelNode, style: ModelRenderStyle) -> dict:
    context = {
        "name": model.name,
        "description": doc_comment_text(model.description),
        "keyword": "declare" if style == ModelRenderStyle.DECLARATION else "export",
        "kind": model.kind.type,
    }
    kind = model.kind
    if isinstance(kind, InterfaceKind):
        context["properties"] = [
            {
                "key": prop.name if is_identifier_type(prop.name) else json.dumps(prop.name),
                "required": prop.required,
                "description": doc_comment_text(prop.description),
                "type": render_type(prop.type, style, model.name, prop.nullable),
            }
            for prop in kind.properties
        ]
    elif isinstance(kind, EnumKind):
        context["members"] = [
            {
                "name": member.name,
                "value": render_literal(member.value),
                "comment": doc_comment_text(member.comment),
            }
            for member in kind.members
        ]
    elif isinstance(kind, AliasKind):
        context["target"] = render_type(kind.target, style, model.name, kind.nullable)
    return context
