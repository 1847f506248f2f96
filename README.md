# zgen

`zgen` reads a struct definition from a Go source file and writes code or
documentation derived from its fields, types and struct tags: accessor
wrappers, functional options, key sets, string-map conversion, a Markdown
parameter table or a PHP type map.

It has no dependencies outside the Python standard library (Python 3.10 or
later).

## Installation

```
pip install .
```

For running the test suite:

```
pip install ".[test]"
pytest
```

## Command line

```
z_gen -f <file.go> -s <StructName> -tp <generator> [-o <output>] [-inplace]
```

| Flag | Meaning |
| ---- | ------- |
| `-f`, `-filename` | Go source file holding the struct |
| `-s`, `-structname` | name of the struct to read |
| `-tp` | which generator to run |
| `-o`, `-output` | write the result to this file (created or truncated) |
| `-inplace` | append the result to the input file itself |

Each long flag is also accepted with two dashes (`--filename`, `--tp`, ...).

Without `-o` or `-inplace` the result is printed to standard output; when
both are given, `-inplace` wins. Both `-f` and `-s` are required: if either
is missing, usage is printed to standard error and the command exits with
status 255. An unknown `-tp` name is reported on standard error with exit
status 1. Every result is preceded by a blank line, a
`// generate by z_gen` comment line and another blank line.

### Generators

| Name | Output |
| ---- | ------ |
| `doc` | Markdown table of JSON name, type and `validate` tag per field |
| `options` | an `Update` method plus a `With<Field>` option function per field |
| `php` | a PHP array mapping JSON names to simple type names |
| `struct_keys` | sets of all JSON keys and of the `int`, `uint64` and `float64` keys |
| `struct2map` | an `Output() map[string]string` method and a `MarshalJSON` method |
| `struct_wrapper` | `Empty<Field>`, `Get<Field>` and `Set<Field>` methods per field |

`struct2map` handles fields of type `int`, `uint64`, `float64` and `string`
(pointer or not); other fields are left out with a warning logged. Generated
Go code is re-indented with tabs by bracket depth.

### Example

Given `order.go`:

```go
package order

type CancelOrder struct {
	OrderId *uint64  `json:"order_id" validate:"required"`
	Lng     *float64 `json:"lng,omitempty" validate:"omitempty"`
}
```

```
z_gen -f order.go -s CancelOrder -tp doc
```

prints:

```

// generate by z_gen

| 参数名| 类型  |  是否必须    |备注|
| ---- | ---- | ---- | ---- |
|order_id|uint64|required| |
|lng|float64|omitempty| |

```

and

```
z_gen -f order.go -s CancelOrder -tp struct_wrapper -inplace
```

appends nil-safe accessor methods for both fields to `order.go`, using the
receiver name `cancelOrder`.

## Library use

```python
from zgen.goparser import parse_file
from zgen.registry import get_generator
from zgen.generators import PhpGenerator

struct = parse_file("order.go", "CancelOrder")
print(struct)                                   # package, receiver, fields and tags
print(PhpGenerator().gen(struct))
print(get_generator("struct_keys").gen(struct))
```

- `zgen.goparser.parse_struct(source, struct_name)` does the same as
  `parse_file` for Go source held in a string. Source without a `package`
  clause or with characters that are not Go raises
  `zgen.goparser.GoSyntaxError`. If the struct is not found, the result
  carries only the package name. Embedded fields are skipped.
- `zgen.model` holds the `Struct`, `Field`, `Func` and `Param` dataclasses;
  `StructTag.get(key)` reads one key of a field tag, returning `""` when it
  is absent.
- `zgen.registry.register(name, generator)` adds a generator (any object
  with a `gen(struct)` method returning text) and `get_generator(name)`
  looks one up, raising `KeyError` for an unknown name. The built-in
  generators are registered when `zgen.generators` is imported.

### Validation rules

The rules used in `validate` struct tags (`gt`, `gte`, `lt`, `lte`, `range`,
`min_len`, `max_len`, `len`, `child`) are available from `zgen.handlers`:
`get_handler(name)` returns the rule (or `None`), `register_handler(name,
handler)` adds one, and `build_check(field, tag, skip_error)` turns one tag
entry such as `range=3,7` into a Go condition and the error expression to
return when it holds. A bad entry raises `HandlerError`, or with
`skip_error` yields `"false"` and an error expression describing it.

## What it does not do

There is no `validate` generator: `zgen` does not write complete `Validate`
methods from `validate` tags. `zgen.handlers` only builds the individual
condition and error expressions for each rule.