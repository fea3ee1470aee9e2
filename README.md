# minic

`minic` reads an expression-level subset of C. Source text goes through a
lexer and a recursive-descent parser. The parse tree is then turned into an
abstract syntax tree, which can be written out as a Graphviz DOT graph.

The package also has building blocks for an ARM32 back end:

- an instruction sequence (ILOC) that prints ARM assembly text
- a simple register allocator
- checks for the platform's immediate-operand and displacement rules
- abstract code-generator base classes

## The language

```c
int a, b;

int main() {
    int c;
    c = a + b - 1;
    return f(c, 2) + (3 - c);
}
```

The parser accepts:

- global and local `int` declarations, with several names after one `int`
- functions that return `int` and take no parameters
- assignments and `return` statements
- nested blocks and expression statements, including the empty statement `;`
- `+` and `-`, grouped from the left
- function calls with arguments
- parenthesised expressions
- decimal integer literals

In the syntax tree, the compile unit lists all global declarations first and
then all functions. Inside a block, only declarations, assignments and
`return` statements become nodes. Nested block statements and expression
statements are parsed but do not appear in the tree.

## Installing

```
pip install .
```

## Command line

```
minic program.c
minic program.c -o ast.dot
```

The first form parses `program.c`. On a lexical or syntax error, or when the
file cannot be opened, it prints the error to standard error and exits with
status 1. With `-o`/`--output`, it also writes the syntax tree as DOT text to
the given file.

## Library use

```python
from minic.frontend import parse_source
from minic.graph import ast_to_dot, output_ast

root = parse_source("int main() { return 1 + 2; }")
print(ast_to_dot(root))          # DOT text of the AST
output_ast(root, "ast.dot")      # write the same text to a file
```

### Modules

- `minic.lexer`: `tokenize(text)` returns a list of `Token`s that ends with an
  EOF token. It raises `LexerError` on a character that starts no token.
- `minic.parser`: `parse(text)` returns a `ParseTree` and raises `ParseError`
  on a syntax error. `Parser` has one method for each grammar rule.
- `minic.visitor`: `CSTVisitor().run(tree)` turns a parse tree into an
  `AstNode`.
- `minic.frontend`: `parse_source(text)`, `parse_file(filename)` and
  `main(argv)`. Their errors are raised as `FrontEndError`.
- `minic.ast`: `AstNode`, `AstOperatorType` and `ValueType`, together with
  the node builders:
  - `create_uint_leaf`
  - `create_var_id`
  - `create_type_node`
  - `create_contain_node`
  - `create_func_def`
  - `create_func_call`
  - `create_var_decl_node`
  - `create_var_decl_stmt_node`
  - `add_var_decl_node`
- `minic.graph`: `node_label`, `ast_to_dot` and `output_ast`.
- `minic.iloc_arm32`: `ILocArm32` collects `ArmInst`s. It emits loads of
  immediates and symbols, loads and stores through a base register,
  register moves, stack-frame allocation, calls, jumps, labels, comments and
  nops. `delete_unused_labels()` marks labels that no branch uses as dead.
  `output(file)` writes the assembly text.
- `minic.register_allocator`: `SimpleRegisterAllocator` hands out r0–r10 to
  values that carry a `load_reg_id` attribute. When all of them are taken, it
  spills the value that got its register earliest.
- `minic.platform_arm32`: register names and numbers, plus `const_expr`,
  `is_disp` and `is_reg`.
- `minic.codegen`: the abstract base classes `CodeGenerator` and
  `CodeGeneratorAsm`. They write generated code to a file or to standard
  output.
  - `CodeGeneratorAsm` writes a header and a data section, then calls
    `gen_function` for every non-built-in function of a module. The module
    must have a `functions` attribute, and each function an `is_builtin`
    attribute.
  - Subclasses supply `gen_header`, `gen_data_section` and `gen_function`.

## What it does not do

The package does not compile a program to assembly. It has:

- no intermediate representation
- no translation from the syntax tree to instructions
- no concrete ARM32 code generator or instruction selector

The `minic` command only parses the source and can write the syntax tree as
DOT text. It does not render images itself. Use Graphviz to turn the DOT file
into a picture.

## Running the tests

```
pip install .[test]
pytest
```