# hypertextgen

`hypertextgen` turns HTML templates with embedded C++ code (`.htcpp` files)
into C++ code that renders the page. The generated class takes a config
object and writes HTML to a stream, or returns it as a string.

## Installation

```
pip install .
```

## Template syntax

| Syntax                 | Meaning                                                   |
|------------------------|-----------------------------------------------------------|
| `$(expression)`        | write the value of an expression to the output            |
| `${ statements }`      | C++ statements run while rendering                        |
| `#{ code }`            | global code placed before the generated class (includes)  |
| `[[ text ]]`           | a section: groups text and nodes without adding markup    |
| `?(condition)`         | conditional extension on a tag, section or expression     |
| `@(loop header)`       | loop extension on a tag, section or expression            |
| `#name(){ ... }`       | a procedure: a named part that can be rendered on its own |
| `` `text` ``           | a raw string literal inside `$( )`, `${ }` and `#{ }`     |

An extension may follow the opening token or the closing token of a node,
but not both:

```html
<ul>
  <li>@(auto& task : cfg.tasks)$(task.name)</li>
</ul>
<p>?(cfg.tasks.empty())Nothing to do</p>
[[ Hello, $(cfg.name)! ]]?(!cfg.name.empty())
```

Within generated code the config object is available as `cfg` and the
output stream as `out`. Void HTML elements (`br`, `img`, `input`, ...) and
tags starting with `!` (such as `<!DOCTYPE html>`) need no closing tag.

## Command line

```
hypertextgen generateHeaderOnly todolist.htcpp -outputDir=generated -className=TodoList
hypertextgen generateHeaderAndSource todolist.htcpp -configClassName=PageParams
hypertextgen generateSharedLibrarySource todolist.htcpp -outputDir=build
```

- `generateHeaderOnly` writes `<name>.h` holding a class whose render
  methods are templated on the config type.
- `generateHeaderAndSource` writes `<name>.h` and `<name>.cpp` for a fixed
  config class given by the required `-configClassName`.
- `generateSharedLibrarySource` writes `<name>.cpp` meant to be built as a
  shared library exporting `makeTemplate` and `deleteTemplate`.

`<name>` is the input file's name without its extension. When `-outputDir`
is omitted the current working directory is used (a relative directory is
taken from the current working directory); when `-className` is omitted
the input file name is used. Template errors are printed with their line
and column, and the command exits with status 1.

## Library use

```python
from hypertextgen.renderers import GeneratedFileType, SingleHeaderRenderer
from hypertextgen.transpiler import Transpiler

transpiler = Transpiler(SingleHeaderRenderer("TodoList"))
files = transpiler.process("todolist.htcpp")
print(files[GeneratedFileType.HEADER])
```

The renderers in `hypertextgen.renderers` are `SingleHeaderRenderer`,
`HeaderAndSourceRenderer` and `SharedLibRenderer`; each returns a dict
mapping `GeneratedFileType.HEADER` or `GeneratedFileType.SOURCE` to the
file's text. `hypertextgen.cli.output_file_path` gives the path the
command writes each file to.

Malformed templates raise `hypertextgen.errors.TemplateError`, whose
message starts with `[line:N, column:M]`; an unreadable input file raises
`hypertextgen.errors.ParsingError`. Both derive from
`hypertextgen.errors.Error`.

The helpers in `hypertextgen.nameutils` (`to_pascal_case`,
`to_snake_case`, `to_lower_case`) convert names into identifier styles.

## What it does not do

`hypertextgen` only writes C++ source text. It does not compile the
generated code, build the shared library, or load a built template
library at run time; that is left to your C++ build and program.

## Running the tests

```
pip install .[test]
pytest
```