import pytest

from rpcxkit.xgen_parser import Parser, is_exported

SERVICE = """package arith

import "context"

// Arith is a service.
type Arith int

type Args struct {
	A int
	B int
}

type Reply struct {
	C int
}

func (t *Arith) Mul(ctx context.Context, args *Args, reply *Reply) error {
	reply.C = args.A * args.B
	return nil
}
"""


def _write(path, text):
    path.write_text(text, encoding="utf-8")
    return str(path)


def test_is_exported():
    assert is_exported("Arith")
    assert not is_exported("arith")
    assert not is_exported("")
    assert not is_exported("_x")


def test_service_after_last_type(tmp_path):
    p = Parser("example/arith")
    p.parse(_write(tmp_path / "a.go", SERVICE), False)
    assert p.pkg_name == "arith"
    assert p.pkg_full_name == "example/arith"
    assert list(p.struct_names) == ["Reply"]


def test_service_type_declared_just_before(tmp_path):
    src = """package svc
import "context"
type Echo struct{}
func (e *Echo) Say(ctx context.Context, a, b *string) error { return nil }
"""
    p = Parser()
    p.parse(_write(tmp_path / "e.go", src), False)
    assert p.struct_names == {"Echo": True}


def test_wrong_shape_is_ignored(tmp_path):
    src = """package svc
import "context"
type A struct{}
func (a *A) Two(ctx context.Context, x int) error { return nil }
type B struct{}
func (b *B) NotErr(ctx context.Context, x, y int) int { return 0 }
type C struct{}
func (c *C) NoCtx(x string, y, z int) error { return nil }
type d struct{}
func (v *d) Hidden(ctx context.Context, x, y int) error { return nil }
"""
    p = Parser()
    p.parse(_write(tmp_path / "s.go", src), False)
    assert p.struct_names == {}


def test_named_result_and_grouped_types(tmp_path):
    src = """package svc
import "context"
type (
	X int
	Y struct {
		F func(a, b int) error
	}
)
func (y *Y) Run(ctx context.Context, a *int, b *int) (err error) {
	/* comment with func Z(ctx context.Context, a, b int) error */
	s := "type Q int"
	_ = s
	return
}
"""
    p = Parser()
    p.parse(_write(tmp_path / "g.go", src), False)
    assert p.struct_names == {"Y": True}


def test_directory(tmp_path):
    _write(tmp_path / "a.go", SERVICE)
    _write(tmp_path / "notes.txt", "not go")
    p = Parser()
    p.parse(str(tmp_path), True)
    assert p.pkg_name == "arith"
    assert "Reply" in p.struct_names


def test_empty_directory(tmp_path):
    p = Parser()
    p.parse(str(tmp_path), True)
    assert p.struct_names == {}
    assert p.pkg_name == ""


def test_syntax_errors(tmp_path):
    with pytest.raises(ValueError):
        Parser().parse(_write(tmp_path / "bad.go", "type X int\n"), False)
    with pytest.raises(ValueError):
        Parser().parse(_write(tmp_path / "bad2.go", "package x\nfunc F( {\n"), False)


def test_missing_file(tmp_path):
    with pytest.raises(OSError):
        Parser().parse(str(tmp_path / "missing.go"), False)