"""Region collector: pre-order walk emitting candidate layer regions.

Each node is dispatched on its tree-sitter type. A handler either declines
(returns ``None``), in which case the default node-type table applies, or
fires: it emits its own sub-ranges and returns the exact children the walk
should continue into. A firing handler suppresses the default mapping for
that node.

The walk uses an explicit stack so deeply nested documents cannot exhaust the
interpreter recursion limit; pushing children in reverse keeps emission order
identical to a recursive pre-order walk, which matters for two things:

1. equal-priority ties in the resolver go to the first emitted candidate
2. enum member access is only recognised after the enum declaration was seen
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TypeAlias

from tree_sitter import Node

from tsxlayers.brackets import find_type_argument_range
from tsxlayers.syntax import ParsedSource
from tsxlayers.types import CandidateRegion, SyntaxLayer, TraversalContext, make_candidate
from tsxlayers.vocabulary import DEFAULT_VOCABULARY, LibraryVocabulary, is_pascal_case


Descent: TypeAlias = list[Node] | None

# ── Default node-type table ─────────────────────────────────────────────

JAVASCRIPT_NODE_TYPES: frozenset[str] = frozenset({
    # declarations
    "lexical_declaration", "variable_declaration", "variable_declarator",
    "function_declaration", "generator_function_declaration", "function_expression",
    "function", "generator_function", "arrow_function", "class_declaration", "class",
    "class_body",
    # statements
    "expression_statement", "statement_block", "if_statement", "else_clause",
    "for_statement", "for_in_statement", "while_statement", "do_statement",
    "switch_statement", "switch_body", "switch_case", "switch_default",
    "try_statement", "catch_clause", "finally_clause", "throw_statement",
    "return_statement", "break_statement", "continue_statement", "labeled_statement",
    "empty_statement", "debugger_statement", "import_statement", "export_statement",
    # expressions
    "member_expression", "subscript_expression", "object", "array", "pair",
    "ternary_expression", "binary_expression", "unary_expression", "update_expression",
    "assignment_expression", "augmented_assignment_expression", "sequence_expression",
    "template_string", "template_substitution", "await_expression", "yield_expression",
    "spread_element", "parenthesized_expression",
    # bindings and patterns
    "required_parameter", "optional_parameter", "object_pattern", "array_pattern",
    "pair_pattern", "rest_pattern", "assignment_pattern",
    # names and literals
    "identifier", "property_identifier", "shorthand_property_identifier",
    "shorthand_property_identifier_pattern", "private_property_identifier",
    "statement_identifier", "string", "number", "regex", "true", "false", "null",
    "undefined", "this", "super",
})

TYPESCRIPT_NODE_TYPES: frozenset[str] = frozenset({
    "type_alias_declaration", "interface_declaration", "enum_declaration",
    "type_annotation", "opting_type_annotation", "omitting_type_annotation",
    "adding_type_annotation", "asserts_annotation", "type_predicate_annotation",
    "type_parameter", "constraint", "default_type", "predefined_type", "object_type",
    "interface_body", "union_type", "intersection_type", "array_type", "tuple_type",
    "function_type", "constructor_type", "conditional_type", "infer_type",
    "type_predicate", "asserts", "type_query", "index_type_query", "lookup_type",
    "parenthesized_type", "literal_type", "template_literal_type", "template_type",
    "readonly_type", "optional_type", "rest_type", "this_type", "existential_type",
    "mapped_type_clause", "index_signature", "call_signature", "construct_signature",
})

JSX_NODE_TYPES: frozenset[str] = frozenset({"jsx_text", "html_character_reference"})

TYPE_REFERENCE_NODE_TYPES: frozenset[str] = frozenset({
    "type_identifier", "nested_type_identifier", "generic_type",
})

_CLASS_NODE_TYPES: frozenset[str] = frozenset({
    "class_declaration", "abstract_class_declaration", "class",
})

# Nodes whose ``name`` is a type_identifier that declares rather than references.
_TYPE_DECLARING_NODE_TYPES: frozenset[str] = frozenset({
    "interface_declaration", "type_alias_declaration", "type_parameter",
    "infer_type", "mapped_type_clause",
})

_MODIFIER_NODE_TYPES: frozenset[str] = frozenset({
    "accessibility_modifier", "override_modifier", "readonly", "abstract",
    "accessor", "declare",
})

_FUNCTION_NODE_TYPES: tuple[str, ...] = (
    "function_declaration", "generator_function_declaration", "function_expression",
    "function", "generator_function", "arrow_function", "function_signature",
)

_METHOD_NODE_TYPES: tuple[str, ...] = (
    "method_definition", "method_signature", "abstract_method_signature",
)


class RegionCollector:
    """Walks one parsed document and accumulates candidate regions."""

    def __init__(
        self,
        parsed: ParsedSource,
        context: TraversalContext,
        vocabulary: LibraryVocabulary = DEFAULT_VOCABULARY,
    ) -> None:
        self.parsed = parsed
        self.text = parsed.text
        self.context = context
        self.vocabulary = vocabulary
        self.regions: list[CandidateRegion] = []

        handlers: dict[str, Callable[[Node], Descent]] = {
            "jsx_element": self._misparsed_generic_arrow,
            "jsx_self_closing_element": self._jsx_tag,
            "jsx_opening_element": self._jsx_tag,
            "jsx_closing_element": self._jsx_closing_tag,
            "jsx_expression": self._jsx_expression,
            "jsx_attribute": self._jsx_attribute,
            "decorator": self._decorator,
            "expression_statement": self._expression_statement,
            "await_expression": self._recovered_using,
            "ambient_declaration": self._ambient,
            "module": self._ambient,
            "internal_module": self._ambient,
            "lexical_declaration": self._using_declaration,
            "variable_declaration": self._using_declaration,
            "using_declaration": self._using_declaration,
            "extends_clause": self._heritage_clause,
            "implements_clause": self._heritage_clause,
            "extends_type_clause": self._heritage_clause,
            "instantiation_expression": self._instantiation,
            "as_expression": self._trailing_type_operator,
            "satisfies_expression": self._trailing_type_operator,
            "type_assertion": self._type_assertion,
            "non_null_expression": self._non_null,
            "variable_declarator": self._variable_declarator,
            "required_parameter": self._parameter,
            "optional_parameter": self._parameter,
            "property_signature": self._property_signature,
            "public_field_definition": self._field_definition,
            "field_definition": self._field_definition,
            "import_statement": self._import,
            "export_statement": self._export,
            "enum_declaration": self._enum,
            "member_expression": self._enum_member_access,
            "call_expression": self._call,
            "new_expression": self._new,
        }
        for node_type in _CLASS_NODE_TYPES:
            handlers[node_type] = self._class
        for node_type in _FUNCTION_NODE_TYPES:
            handlers[node_type] = self._function
        for node_type in _METHOD_NODE_TYPES:
            handlers[node_type] = self._method
        self._handlers = handlers

    # ── walk ────────────────────────────────────────────────────────────

    def collect(self) -> list[CandidateRegion]:
        stack: list[Node] = [self.parsed.root]
        while stack:
            node = stack.pop()
            handler = self._handlers.get(node.type)
            descent = handler(node) if handler is not None else None
            if descent is None:
                layer = self._default_layer(node)
                if layer is not None:
                    self._add_node(node, layer)
                descent = self.parsed.children(node)
            stack.extend(reversed(descent))
        return self.regions

    def _default_layer(self, node: Node) -> SyntaxLayer | None:
        node_type = node.type
        if node_type in TYPE_REFERENCE_NODE_TYPES:
            return self._type_reference_layer(node)
        if node_type in TYPESCRIPT_NODE_TYPES:
            return "typescript"
        if node_type in JSX_NODE_TYPES:
            return "jsx"
        if node_type == "identifier" and self._text(node) == self.vocabulary.namespace:
            return "react"
        if node_type in JAVASCRIPT_NODE_TYPES:
            return "javascript"
        return None

    def _type_reference_layer(self, node: Node) -> SyntaxLayer:
        parent = node.parent
        if node.type == "type_identifier" and parent is not None:
            if parent.type in _CLASS_NODE_TYPES:
                return "javascript"
            if parent.type in _TYPE_DECLARING_NODE_TYPES and parent.child_by_field_name("name") == node:
                return "typescript"
        if parent is not None and parent.type in ("generic_type", "nested_type_identifier"):
            # The enclosing reference decides escalation for the whole name.
            return "typescript"
        if node.type == "generic_type":
            name_node = node.child_by_field_name("name")
            name = self._text(name_node) if name_node is not None else ""
        else:
            name = self._text(node)
        name = "".join(name.split())
        if self.vocabulary.is_library_type_name(name):
            return "react"
        return "typescript"

    # ── emit helpers ────────────────────────────────────────────────────

    def _add(self, start: int, end: int, layer: SyntaxLayer) -> None:
        candidate = make_candidate(start, end, layer)
        if candidate is not None:
            self.regions.append(candidate)

    def _add_node(self, node: Node, layer: SyntaxLayer) -> None:
        self._add(self.parsed.start(node), self.parsed.end(node), layer)

    def _text(self, node: Node) -> str:
        return self.parsed.node_text(node)

    def _mark_bracket_list(self, list_node: Node | None) -> None:
        """Mark a ``<...>`` list as typescript, located lexically from its first entry."""
        if list_node is None:
            return
        entries = self.parsed.children(list_node)
        if not entries:
            return
        span = find_type_argument_range(self.text, self.parsed.start(entries[0]))
        if span is not None:
            self._add(span[0], span[1], "typescript")

    def _mark_modifiers(self, node: Node) -> None:
        for modifier in self.parsed.tokens(node, _MODIFIER_NODE_TYPES):
            self._add_node(modifier, "typescript")

    def _mark_annotation(self, node: Node, annotation: Node | None) -> None:
        """Colon through end of type; starts at a preceding ``?`` when present."""
        if annotation is None:
            return
        start = self.parsed.start(annotation)
        optional = self.parsed.token(node, "?")
        if optional is not None and self.parsed.start(optional) < start:
            start = self.parsed.start(optional)
        self._add(start, self.parsed.end(annotation), "typescript")

    def _is_namespaced_tag(self, name: Node) -> bool:
        if name.type not in ("member_expression", "nested_identifier"):
            return False
        parts = self.parsed.children(name)
        return bool(parts) and parts[0].type == "identifier" and self._text(parts[0]) == self.vocabulary.namespace

    # ── JSX ─────────────────────────────────────────────────────────────

    def _misparsed_generic_arrow(self, node: Node) -> Descent:
        # `<T>(arg: T) => arg` read as an element `<T>` with text content.
        open_tag = node.child_by_field_name("open_tag")
        if open_tag is None or open_tag.type != "jsx_opening_element":
            return None
        name = open_tag.child_by_field_name("name")
        if name is None or name.type != "identifier":
            return None
        if open_tag.children_by_field_name("attribute"):
            return None
        content = [
            child
            for child in self.parsed.children(node)
            if child.type not in ("jsx_opening_element", "jsx_closing_element")
        ]
        if not content or content[0].type != "jsx_text":
            return None
        open_end = self.parsed.end(open_tag)
        boundary = self.parsed.start(content[1]) if len(content) > 1 else self.parsed.end(node)
        if "=>" not in self.text[open_end:boundary]:
            return None
        self._add(self.parsed.start(node), open_end, "typescript")
        self._add(open_end, self.parsed.end(node), "javascript")
        return content[1:]

    def _jsx_tag(self, node: Node) -> Descent:
        start = self.parsed.start(node)
        end = self.parsed.end(node)
        name = node.child_by_field_name("name")
        if name is None:
            # fragment `<>`
            self._add(start, end, "jsx")
            return []

        if self._is_namespaced_tag(name):
            self._add(start, start + 1, "jsx")
            self._add_node(name, "react")
        else:
            self._add(start, self.parsed.end(name), "jsx")

        self._mark_bracket_list(node.child_by_field_name("type_arguments"))

        # closers are absent when the tag is cut off
        if node.type == "jsx_self_closing_element":
            if self.text[end - 2:end] == "/>":
                self._add(end - 2, end, "jsx")
        elif self.text[end - 1:end] == ">":
            self._add(end - 1, end, "jsx")
        return self.parsed.children(node)

    def _jsx_closing_tag(self, node: Node) -> Descent:
        start = self.parsed.start(node)
        end = self.parsed.end(node)
        name = node.child_by_field_name("name")
        if name is not None and self._is_namespaced_tag(name):
            self._add(start, start + 2, "jsx")
            self._add_node(name, "react")
            self._add(end - 1, end, "jsx")
        else:
            self._add(start, end, "jsx")
        return []

    def _jsx_expression(self, node: Node) -> Descent:
        start = self.parsed.start(node)
        end = self.parsed.end(node)
        inner = self.parsed.children(node)
        if inner and inner[0].type == "spread_element":
            # `{...props}` or `{ ...props }`
            spread_start = start + 1
            while spread_start < end and self.text[spread_start].isspace():
                spread_start += 1
            self._add(start, spread_start + 3, "jsx")
            if end > spread_start and self.text[end - 1] == "}":
                self._add(end - 1, end, "jsx")
            return inner

        self._add(start, start + 1, "jsx")
        # the closing brace can be missing in incomplete code
        if end > start + 1 and self.text[end - 1] == "}":
            self._add(end - 1, end, "jsx")
        return inner

    def _jsx_attribute(self, node: Node) -> Descent:
        parts = self.parsed.children(node)
        if not parts:
            return []
        name = parts[0]
        name_end = self.parsed.end(name)
        if self._text(name) in self.vocabulary.jsx_attributes:
            self._add_node(name, "react")
        else:
            self._add_node(name, "jsx")

        if len(parts) < 2:
            return []
        value = parts[1]
        self._add(name_end, self.parsed.start(value), "jsx")
        if value.type == "string":
            self._add_node(value, "jsx")
            return []
        return [value]

    # ── declarations and statements ─────────────────────────────────────

    def _decorator(self, node: Node) -> Descent:
        self._add_node(node, "typescript")
        return []

    def _expression_statement(self, node: Node) -> Descent:
        inner = self.parsed.children(node)
        if len(inner) != 1 or inner[0].type != "string":
            return self._recovered_using(node)
        literal = self._text(inner[0])[1:-1]
        if literal in self.vocabulary.directives:
            self._add_node(node, "react")
        else:
            self._add_node(node, "javascript")
        return []

    def _ambient(self, node: Node) -> Descent:
        for child in self.parsed.children(node):
            if child.type == "enum_declaration":
                self._track_enum(child)
        self._add_node(node, "typescript")
        return []

    def _mark_using_keywords(self, node: Node, first_binding: int) -> bool:
        """Mark `using` / `await using` before the first binding; False if absent."""
        start = self.parsed.start(node)
        prefix = self.text[start:first_binding]
        keywords = prefix.split()
        if not keywords or keywords[-1] != "using":
            return False
        if any(word not in ("await", "using") for word in keywords):
            return False
        self._add(start, start + len(prefix.rstrip()), "typescript")
        return True

    def _using_declaration(self, node: Node) -> Descent:
        declarators = [
            child for child in self.parsed.children(node) if child.type == "variable_declarator"
        ]
        if not declarators:
            return None
        if not self._mark_using_keywords(node, self.parsed.start(declarators[0])):
            return None
        self._add_node(node, "javascript")
        return self.parsed.children(node)

    def _recovered_using(self, node: Node) -> Descent:
        # Grammars without `using` support recover `using res = f()` as an
        # assignment whose left side follows the stray keyword(s).
        assignment = self._find_recovered_assignment(node)
        if assignment is None:
            return None
        left = assignment.child_by_field_name("left")
        if left is None or not self._mark_using_keywords(node, self.parsed.start(left)):
            return None
        self._add_node(node, "javascript")
        return self.parsed.children(node)

    def _find_recovered_assignment(self, node: Node) -> Node | None:
        for child in self.parsed.children(node):
            if child.type == "assignment_expression":
                return child
            if child.type in ("ERROR", "await_expression"):
                found = self._find_recovered_assignment(child)
                if found is not None:
                    return found
        return None

    def _heritage_site(self, name: Node, type_arguments: Node | None) -> None:
        if name.type in ("identifier", "type_identifier") and self._text(name) in self.vocabulary.types:
            self._add_node(name, "react")
        self._mark_bracket_list(type_arguments)

    def _heritage_clause(self, node: Node) -> Descent:
        items = self.parsed.children(node)
        descent: list[Node] = []
        for idx, item in enumerate(items):
            if item.type == "type_arguments":
                # attached to the preceding value, handled with it
                continue
            if item.type == "generic_type":
                name = item.child_by_field_name("name")
                if name is not None:
                    self._heritage_site(name, item.child_by_field_name("type_arguments"))
                descent.extend(self.parsed.children(item))
                continue
            following = items[idx + 1] if idx + 1 < len(items) else None
            type_arguments = following if following is not None and following.type == "type_arguments" else None
            self._heritage_site(item, type_arguments)
            descent.append(item)
            if type_arguments is not None:
                descent.append(type_arguments)
        return descent

    def _instantiation(self, node: Node) -> Descent:
        inner = self.parsed.children(node)
        if not inner:
            return None
        type_arguments = node.child_by_field_name("type_arguments")
        self._heritage_site(inner[0], type_arguments)
        return inner

    def _class(self, node: Node) -> Descent:
        self._add_node(node, "javascript")
        abstract = self.parsed.token(node, "abstract")
        if abstract is not None:
            self._add_node(abstract, "typescript")
        self._mark_bracket_list(node.child_by_field_name("type_parameters"))
        return self.parsed.children(node)

    def _enum(self, node: Node) -> Descent:
        self._track_enum(node)
        self._add_node(node, "typescript")
        return []

    def _track_enum(self, node: Node) -> None:
        name = node.child_by_field_name("name")
        if name is not None:
            self.context.enum_names.add(self._text(name))

    def _import(self, node: Node) -> Descent:
        specifiers = self._specifiers(node, "import_clause", "named_imports", "import_specifier")
        if self.parsed.token(node, "type") is not None:
            return self._type_only_module_statement(node, specifiers)
        self._add_node(node, "javascript")
        self._mark_type_specifiers(specifiers)
        return self.parsed.children(node)

    def _export(self, node: Node) -> Descent:
        specifiers = self._specifiers(node, None, "export_clause", "export_specifier")
        if self.parsed.token(node, "type") is not None:
            return self._type_only_module_statement(node, specifiers)
        self._add_node(node, "javascript")
        self._mark_type_specifiers(specifiers)
        return self.parsed.children(node)

    def _specifiers(
        self,
        node: Node,
        clause_type: str | None,
        list_type: str,
        specifier_type: str,
    ) -> list[Node]:
        containers = [node]
        if clause_type is not None:
            containers = [child for child in self.parsed.children(node) if child.type == clause_type]
        out: list[Node] = []
        for container in containers:
            for child in self.parsed.children(container):
                if child.type == list_type:
                    out.extend(row for row in self.parsed.children(child) if row.type == specifier_type)
        return out

    @staticmethod
    def _bound_name(specifier: Node) -> Node | None:
        return specifier.child_by_field_name("alias") or specifier.child_by_field_name("name")

    def _type_only_module_statement(self, node: Node, specifiers: list[Node]) -> Descent:
        self._add_node(node, "typescript")
        for specifier in specifiers:
            bound = self._bound_name(specifier)
            if bound is not None and self._text(bound) in self.vocabulary.types:
                self._add_node(bound, "react")
        return []

    def _mark_type_specifiers(self, specifiers: list[Node]) -> None:
        # import { type Foo, Bar } / export { type Foo }
        for specifier in specifiers:
            if self.parsed.token(specifier, "type") is None:
                continue
            bound = self._bound_name(specifier)
            if bound is None:
                continue
            bound_start = self.parsed.start(bound)
            self._add(self.parsed.start(specifier), bound_start, "typescript")
            if self._text(bound) in self.vocabulary.types:
                self._add_node(bound, "react")
            else:
                self._add_node(bound, "typescript")

    # ── type narrowing ──────────────────────────────────────────────────

    def _trailing_type_operator(self, node: Node) -> Descent:
        # expr as Type / expr satisfies Type
        inner = self.parsed.children(node)
        if not inner:
            return None
        operand = inner[0]
        self._add_node(operand, "javascript")
        self._add(self.parsed.end(operand), self.parsed.end(node), "typescript")
        return [operand]

    def _type_assertion(self, node: Node) -> Descent:
        # <Type>expr, only reachable outside the TSX dialect
        operands = [child for child in self.parsed.children(node) if child.type != "type_arguments"]
        if not operands:
            return None
        operand = operands[-1]
        self._add(self.parsed.start(node), self.parsed.start(operand), "typescript")
        self._add_node(operand, "javascript")
        return [operand]

    def _non_null(self, node: Node) -> Descent:
        inner = self.parsed.children(node)
        if not inner:
            return None
        operand = inner[0]
        end = self.parsed.end(node)
        self._add_node(operand, "javascript")
        self._add(end - 1, end, "typescript")
        return [operand]

    # ── typed bindings ──────────────────────────────────────────────────

    def _variable_declarator(self, node: Node) -> Descent:
        annotation = node.child_by_field_name("type")
        if annotation is None:
            return None
        self._add_node(node, "javascript")
        self._mark_annotation(node, annotation)
        return self.parsed.children(node)

    def _parameter(self, node: Node) -> Descent:
        self._add_node(node, "javascript")
        self._mark_modifiers(node)
        self._mark_annotation(node, node.child_by_field_name("type"))
        return self.parsed.children(node)

    def _property_signature(self, node: Node) -> Descent:
        # interface members carry no javascript base
        self._mark_modifiers(node)
        self._mark_annotation(node, node.child_by_field_name("type"))
        return self.parsed.children(node)

    def _field_definition(self, node: Node) -> Descent:
        self._add_node(node, "javascript")
        self._mark_modifiers(node)
        self._mark_annotation(node, node.child_by_field_name("type"))
        return self.parsed.children(node)

    def _method(self, node: Node) -> Descent:
        parent = node.parent
        if node.type == "method_definition" or (parent is not None and parent.type == "class_body"):
            self._add_node(node, "javascript")
        self._mark_modifiers(node)
        self._mark_return_type(node)
        self._mark_bracket_list(node.child_by_field_name("type_parameters"))
        return self.parsed.children(node)

    def _function(self, node: Node) -> Descent:
        self._add_node(node, "javascript")
        self._mark_return_type(node)
        self._mark_bracket_list(node.child_by_field_name("type_parameters"))
        return self.parsed.children(node)

    def _mark_return_type(self, node: Node) -> None:
        return_type = node.child_by_field_name("return_type")
        if return_type is not None:
            self._add_node(return_type, "typescript")

    # ── expressions ─────────────────────────────────────────────────────

    def _enum_member_access(self, node: Node) -> Descent:
        target = node.child_by_field_name("object")
        if target is None or target.type != "identifier":
            return None
        if self._text(target) not in self.context.enum_names:
            return None
        self._add_node(node, "typescript")
        return []

    def _call(self, node: Node) -> Descent:
        self._mark_bracket_list(node.child_by_field_name("type_arguments"))
        callee = node.child_by_field_name("function")
        if callee is None:
            self._add_node(node, "javascript")
            return self.parsed.children(node)

        name = "".join(self._text(callee).split())
        vocabulary = self.vocabulary
        if vocabulary.is_hook_call(name) or name in vocabulary.utilities:
            self._add_node(callee, "react")
        elif vocabulary.is_element_factory(name):
            # a bare `createElement` is a utility; only the namespaced form lands here
            self._add_node(callee, "react")
            self._mark_element_factory_arguments(node.child_by_field_name("arguments"))
            return self.parsed.children(node)
        elif vocabulary.is_namespaced(name):
            self._add_node(callee, "react")
        self._add_node(node, "javascript")
        return self.parsed.children(node)

    def _mark_element_factory_arguments(self, arguments: Node | None) -> None:
        # createElement(Component, { key: ... }, ...children)
        if arguments is None or arguments.type != "arguments":
            return
        args = self.parsed.children(arguments)
        if not args:
            return
        first = args[0]
        if first.type == "identifier" and is_pascal_case(self._text(first)):
            self._add_node(first, "react")
        elif first.type == "member_expression":
            target = first.child_by_field_name("object")
            if target is not None and self._text(target) == self.vocabulary.namespace:
                self._add_node(first, "react")
        if len(args) < 2 or args[1].type != "object":
            return
        for prop in self.parsed.children(args[1]):
            if prop.type != "pair":
                continue
            key = prop.child_by_field_name("key")
            if key is not None and key.type == "property_identifier" and self._text(key) == "key":
                self._add_node(key, "react")

    def _new(self, node: Node) -> Descent:
        self._add_node(node, "javascript")
        self._mark_bracket_list(node.child_by_field_name("type_arguments"))
        return self.parsed.children(node)


def collect_regions(
    parsed: ParsedSource,
    context: TraversalContext,
    vocabulary: LibraryVocabulary = DEFAULT_VOCABULARY,
) -> list[CandidateRegion]:
    """Walk the tree and return candidate regions in emission order."""
    return RegionCollector(parsed, context, vocabulary).collect()
