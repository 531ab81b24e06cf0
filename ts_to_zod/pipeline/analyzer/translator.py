"""
Type expression translator.

Maps a TypeScript type node to a zod schema expression tree, applying the
refinements derived from JSDoc tags and from the structural context
(optional properties, Partial<T>, Required<T>).
"""

from __future__ import annotations

from typing import Callable

from ..source_ast.jsdoc import JSDocTags
from ..source_ast.nodes import (
    ArrayNode,
    DeclarationNode,
    IntersectionNode,
    LiteralNode,
    ObjectNode,
    PrimitiveNode,
    ReferenceNode,
    TupleNode,
    TypeNode,
    UnionNode,
    UnsupportedNode,
)
from .ir_nodes import (
    ArrayLiteral,
    Expr,
    Identifier,
    LiteralValue,
    MethodChain,
    ObjectEntry,
    ObjectLiteral,
    RegexLiteral,
    SchemaDef,
    SchemaRef,
    UnsupportedExpr,
    ZodCall,
    ZodProperty,
)

# Predefined types with a zod constructor of the same name
ZOD_PRIMITIVES = {
    "string",
    "number",
    "boolean",
    "bigint",
    "symbol",
    "any",
    "unknown",
    "never",
    "void",
    "undefined",
    "null",
}

# Generic types that wrap a single type argument
ZOD_WRAPPERS = {
    "Array": "array",
    "ReadonlyArray": "array",
    "Promise": "promise",
    "Set": "set",
}

# Utility types mapped to a key mask on an existing schema
KEY_MASK_UTILITIES = {"Omit": "omit", "Pick": "pick"}


def jsdoc_tags_to_zod_properties(
    jsdoc_tags: JSDocTags,
    is_optional: bool = False,
    is_partial: bool = False,
    is_required: bool = False,
) -> list[ZodProperty]:
    """
    Convert JSDoc tags and context flags to ordered zod refinements.

    Order: bounds, format, pattern, optional, partial, required. `default`
    tags produce no refinement.
    """
    properties = []
    if jsdoc_tags.minimum is not None:
        properties.append(ZodProperty("min", [LiteralValue(jsdoc_tags.minimum)]))
    if jsdoc_tags.maximum is not None:
        properties.append(ZodProperty("max", [LiteralValue(jsdoc_tags.maximum)]))
    if jsdoc_tags.min_length is not None:
        properties.append(ZodProperty("min", [LiteralValue(jsdoc_tags.min_length)]))
    if jsdoc_tags.max_length is not None:
        properties.append(ZodProperty("max", [LiteralValue(jsdoc_tags.max_length)]))
    if jsdoc_tags.format:
        properties.append(ZodProperty(jsdoc_tags.format))
    if jsdoc_tags.pattern:
        properties.append(ZodProperty("regex", [RegexLiteral(jsdoc_tags.pattern)]))
    if is_optional:
        properties.append(ZodProperty("optional"))
    if is_partial:
        properties.append(ZodProperty("partial"))
    if is_required:
        properties.append(ZodProperty("required"))
    return properties


def chain(expr: Expr, properties: list[ZodProperty]) -> Expr:
    """Append refinement operations to an expression."""
    if not properties:
        return expr
    if isinstance(expr, MethodChain):
        return MethodChain(target=expr.target, properties=expr.properties + properties)
    return MethodChain(target=expr, properties=list(properties))


class TypeTranslator:
    """Translates declarations into zod schema expressions."""

    def __init__(
        self,
        get_schema_name: Callable[[str], str],
        declared_names: set[str] | None = None,
        strict: bool = False,
    ):
        """
        Initialize the translator.

        Args:
            get_schema_name: Naming function for schema constants
            declared_names: Every type name declared in the source
            strict: Whether object schemas reject unknown keys
        """
        self.get_schema_name = get_schema_name
        self.declared_names = declared_names or set()
        self.strict = strict

        # Per-declaration state
        self.dependencies: list[str] = []
        self.unsupported: list[str] = []

    def translate_declaration(self, declaration: DeclarationNode) -> SchemaDef:
        """
        Translate a declaration into a schema definition.

        Args:
            declaration: The parsed declaration

        Returns:
            SchemaDef with the expression, dependencies and unsupported reasons
        """
        self.dependencies = []
        self.unsupported = []

        if declaration.type_parameters:
            expression = self._unsupported(f"generic declaration <{', '.join(declaration.type_parameters)}>", declaration.name)
        elif declaration.kind == "enum":
            expression = chain(ZodCall("nativeEnum", [Identifier(declaration.name)]), jsdoc_tags_to_zod_properties(declaration.jsdoc))
        elif declaration.kind == "interface" and declaration.extends and isinstance(declaration.body, ObjectNode):
            expression = chain(self._translate_extends(declaration), jsdoc_tags_to_zod_properties(declaration.jsdoc))
        else:
            expression = self.translate(declaration.body, declaration.jsdoc)

        return SchemaDef(
            type_name=declaration.name,
            schema_name=self.get_schema_name(declaration.name),
            expression=expression,
            dependencies=list(self.dependencies),
            exported=declaration.exported,
            comment=declaration.comment,
            unsupported=list(self.unsupported),
            needs_type_import=declaration.kind == "enum",
        )

    def translate(
        self,
        node: TypeNode | None,
        jsdoc_tags: JSDocTags | None = None,
        is_optional: bool = False,
        is_partial: bool = False,
        is_required: bool = False,
    ) -> Expr:
        """
        Translate a type node into a schema expression.

        Args:
            node: The type node
            jsdoc_tags: Tags of the enclosing declaration or property
            is_optional: The node is an optional property
            is_partial: All properties must be made optional
            is_required: All properties must be made required

        Returns:
            Schema expression tree
        """
        jsdoc_tags = jsdoc_tags or JSDocTags()

        # Partial<T> and Required<T> flag the inner translation
        if isinstance(node, ReferenceNode) and node.name in ("Partial", "Required") and node.name not in self.declared_names and len(node.type_arguments) == 1:
            return self.translate(
                node.type_arguments[0],
                jsdoc_tags,
                is_optional=is_optional,
                is_partial=is_partial or node.name == "Partial",
                is_required=is_required or node.name == "Required",
            )

        base, nullability = self._translate_base(node)
        if is_optional and "optional" in nullability:
            nullability.remove("optional")

        properties = jsdoc_tags_to_zod_properties(jsdoc_tags, is_optional, is_partial, is_required)
        split = len([p for p in properties if p.identifier not in ("optional", "partial", "required")])
        properties[split:split] = [ZodProperty(name) for name in nullability]
        return chain(base, properties)

    def _translate_base(self, node: TypeNode | None) -> tuple[Expr, list[str]]:
        """Translate the structure of a node; returns the nullability modifiers apart."""
        if node is None:
            return ZodCall("any"), []

        if isinstance(node, PrimitiveNode):
            if node.type_name in ZOD_PRIMITIVES:
                return ZodCall(node.type_name), []
            if node.type_name == "object":
                return ZodCall("record", [ZodCall("any")]), []
            return self._unsupported(f"type `{node.type_name}`", node.source_text), []

        if isinstance(node, LiteralNode):
            return ZodCall("literal", [LiteralValue(node.value)]), []

        if isinstance(node, UnionNode):
            return self._translate_union(node)

        if isinstance(node, IntersectionNode):
            members = [self.translate(member) for member in node.members]
            expr: Expr = ZodCall("intersection", members[:2])
            return chain(expr, [ZodProperty("and", [member]) for member in members[2:]]), []

        if isinstance(node, ArrayNode):
            return ZodCall("array", [self.translate(node.items)]), []

        if isinstance(node, TupleNode):
            return ZodCall("tuple", [ArrayLiteral([self.translate(item) for item in node.items])]), []

        if isinstance(node, ObjectNode):
            return self._translate_object(node), []

        if isinstance(node, ReferenceNode):
            return self._translate_reference(node), []

        if isinstance(node, UnsupportedNode):
            return self._unsupported(f"{node.reason.replace('_', ' ')} `{node.source_text}`", node.source_text), []

        return self._unsupported(f"node {type(node).__name__}", node.source_text), []

    def _translate_union(self, node: UnionNode) -> tuple[Expr, list[str]]:
        """Translate a union; null and undefined members become modifiers."""
        nullability = []
        variants = []
        for variant in node.variants:
            if isinstance(variant, PrimitiveNode) and variant.type_name in ("null", "undefined"):
                modifier = "nullable" if variant.type_name == "null" else "optional"
                if modifier not in nullability:
                    nullability.append(modifier)
            else:
                variants.append(variant)

        if not variants:
            variants, nullability = node.variants, []

        if len(variants) == 1:
            return self.translate(variants[0]), nullability
        return ZodCall("union", [ArrayLiteral([self.translate(variant) for variant in variants])]), nullability

    def _object_shape(self, obj: ObjectNode) -> ObjectLiteral:
        entries = []
        for prop in obj.properties:
            entries.append(
                ObjectEntry(
                    key=prop.name,
                    value=self.translate(prop.type_node, prop.jsdoc, is_optional=prop.is_optional),
                    comment=prop.comment,
                )
            )
        return ObjectLiteral(entries=entries)

    def _translate_object(self, obj: ObjectNode) -> Expr:
        if obj.index_value is not None and not obj.properties:
            return ZodCall("record", [self.translate(obj.index_value)])

        expr: Expr = ZodCall("object", [self._object_shape(obj)])
        if obj.index_value is not None:
            return chain(expr, [ZodProperty("catchall", [self.translate(obj.index_value)])])
        if self.strict:
            return chain(expr, [ZodProperty("strict")])
        return expr

    def _translate_extends(self, declaration: DeclarationNode) -> Expr:
        """Translate `interface A extends B, C { ... }` as B.merge(C).extend({...})."""
        bases = [self.translate(base) for base in declaration.extends]
        properties = [ZodProperty("merge", [base]) for base in bases[1:]]
        properties.append(ZodProperty("extend", [self._object_shape(declaration.body)]))
        if self.strict:
            properties.append(ZodProperty("strict"))
        return chain(bases[0], properties)

    def _translate_reference(self, node: ReferenceNode) -> Expr:
        name = node.name
        args = node.type_arguments

        if name not in self.declared_names:
            builtin = self._translate_builtin(node)
            if builtin is not None:
                return builtin

        if args:
            return self._unsupported(f"generic type `{node.source_text}`", node.source_text)

        if name not in self.dependencies:
            self.dependencies.append(name)
        return SchemaRef(schema_name=self.get_schema_name(name), type_name=name)

    def _translate_builtin(self, node: ReferenceNode) -> Expr | None:
        """Translate global and utility types; None when the name is not one."""
        name = node.name
        args = node.type_arguments

        if name == "Date" and not args:
            return ZodCall("date")

        if name in ZOD_WRAPPERS and len(args) == 1:
            return ZodCall(ZOD_WRAPPERS[name], [self.translate(args[0])])

        if name == "Record" and len(args) == 2:
            key, value = args
            if isinstance(key, PrimitiveNode) and key.type_name == "string":
                return ZodCall("record", [self.translate(value)])
            return ZodCall("record", [self.translate(key), self.translate(value)])

        if name == "Map" and len(args) == 2:
            return ZodCall("map", [self.translate(args[0]), self.translate(args[1])])

        if name in KEY_MASK_UTILITIES and len(args) == 2:
            keys = self._literal_keys(args[1])
            if keys is None:
                return self._unsupported(f"non-literal keys in `{node.source_text}`", node.source_text)
            target = self.translate(args[0])
            mask = ObjectLiteral(
                entries=[ObjectEntry(key=key, value=LiteralValue(True)) for key in keys],
                multiline=False,
                quote_keys=True,
            )
            return chain(target, [ZodProperty(KEY_MASK_UTILITIES[name], [mask])])

        return None

    def _literal_keys(self, node: TypeNode) -> list[str] | None:
        """Extract the string keys of "a" or "a" | "b"; None if not literal."""
        variants = node.variants if isinstance(node, UnionNode) else [node]
        keys = []
        for variant in variants:
            if not isinstance(variant, LiteralNode) or not isinstance(variant.value, str):
                return None
            keys.append(variant.value)
        return keys

    def _unsupported(self, reason: str, source_text: str) -> UnsupportedExpr:
        self.unsupported.append(reason)
        return UnsupportedExpr(reason=reason, source_text=source_text)
