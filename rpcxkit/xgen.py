"""Generate a server stub that registers the services found in Go sources."""

from __future__ import annotations

import argparse
import os
import sys
from collections.abc import Sequence
from typing import TextIO

from rpcxkit.xgen_parser import Parser

_IMPORTS_HEAD = """
import (
  "flag"
  "time"

  metrics "github.com/rcrowley/go-metrics"
  "github.com/smallnest/rpcx/server"
  "github.com/smallnest/rpcx/serverplugin\""""

_MAIN_TAIL = """
	basePath = flag.String("base", "/rpcx", "prefix path")
)
	
func main() {
	flag.Parse()

	_ = time.Second
	_ = metrics.UseNilMetrics
	_ = serverplugin.GetFunctionName

	s := server.NewServer()
	addRegistryPlugin(s)

	registerServices(s)

	s.Serve("tcp", *addr)
}"""

_REGISTRIES = {
    "etcd": """	// add registery
	r := &serverplugin.EtcdRegisterPlugin{
		ServiceAddress: "tcp@" + *addr,
		EtcdServers:    []string{*rAddr},
		BasePath:       *basePath,
		Metrics:        metrics.NewRegistry(),
		UpdateInterval: time.Minute,
	}""",
    "consul": """	// add registery
	r := &serverplugin.ConsulRegisterPlugin{
		ServiceAddress: "tcp@" + *addr,
		ConsulServers:  []string{*rAddr},
		BasePath:       *basePath,
		Metrics:        metrics.NewRegistry(),
		UpdateInterval: time.Minute,
	}""",
    "zookeeper": """	// add registery
	r := &serverplugin.ZooKeeperRegisterPlugin{
		ServiceAddress:   "tcp@" + *addr,
		ZooKeeperServers: []string{*rAddr},
		BasePath:         *basePath,
		Metrics:          metrics.NewRegistry(),
		UpdateInterval:   time.Minute,
	}""",
    "mdns": """
			r := serverplugin.NewMDNSRegisterPlugin("tcp@"+*addr, 8972, metrics.NewRegistry(), time.Minute, "")""",
}

_START_REGISTRY = """
	err := r.Start()
	if err != nil {
		//log.Fatal(err)
	}
	s.Plugins.Add(r)"""


def generate(parsers: Sequence[Parser], out: TextIO, build_tags: str = "", registry: str = "") -> None:
    """Write the stub program for ``parsers`` to ``out``."""

    def line(text: str = "") -> None:
        out.write(text + "\n")

    if build_tags:
        line("// +build  " + build_tags)
        line()
    line("// AUTOGENERATED FILE: rpcx server stub code")
    line("// compilable during generation.")
    line()
    line("package main")
    line(_IMPORTS_HEAD)

    imported: set[str] = set()
    for p in parsers:
        if p.pkg_full_name not in imported:
            line('  "' + p.pkg_full_name + '"')
            imported.add(p.pkg_full_name)
    line(")")
    line()

    main_fn = """
var (
	addr     = flag.String("addr", "localhost:8972", "server address")"""
    if registry in ("etcd", "consul", "zookeeper"):
        main_fn += """
	rAddr = flag.String("rAddr", "localhost:2379", "register address")"""
    line(main_fn + _MAIN_TAIL)

    line("func registerServices(s *server.Server) {")
    for p in parsers:
        for name in p.struct_names:
            line("\ts.Register(new(" + p.pkg_name + "." + name + '), "")')
    line("}")

    line("func addRegistryPlugin(s *server.Server) {")
    plugin = _REGISTRIES.get(registry)
    if plugin is None:
        line("\n\t\t")
    else:
        line(plugin)
        line(_START_REGISTRY)
    line("}")


def _gopath() -> str:
    return os.environ.get("GOPATH") or os.path.join(os.path.expanduser("~"), "go")


def _emit(parsers: Sequence[Parser], output: str, build_tags: str, registry: str) -> None:
    if not output:
        generate(parsers, sys.stdout, build_tags, registry)
        return
    with open(output, "w", encoding="utf-8") as handle:
        generate(parsers, handle, build_tags, registry)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the stub generator; return the process exit status."""
    arg_parser = argparse.ArgumentParser(prog="xgen")
    arg_parser.add_argument("-pkg", action="store_true",
                            help="process the whole package instead of just the given file")
    arg_parser.add_argument("-o", default="", help="specify the filename of the output")
    arg_parser.add_argument("-tags", default="", help="build tags to add to generated file")
    arg_parser.add_argument("-r", default="",
                            help="registry type. support etcd, consul, zookeeper, mdns")
    arg_parser.add_argument("files", nargs="*")
    args = arg_parser.parse_args(argv)

    src_root = os.path.join(_gopath(), "src")
    files = list(args.files)
    if args.pkg:
        if not files:
            print("not set packages", file=sys.stderr)
            return 1
        files = [os.path.join(src_root, f) for f in files]

    if not files:
        arg_parser.print_usage(sys.stderr)
        return 1

    parsers: list[Parser] = []
    for fname in files:
        is_dir = os.path.isdir(fname)
        os.stat(fname)
        fname = os.path.abspath(fname)
        try:
            rel_dir = os.path.relpath(fname, src_root)
        except ValueError as exc:
            print(f"provided directory not under GOPATH ({_gopath()}): {exc}", end="")
            return 0
        p = Parser(rel_dir)
        try:
            p.parse(fname, is_dir)
        except (ValueError, OSError) as exc:
            print(f"Error parsing {fname}: {exc}", end="")
            return 0
        parsers.append(p)
        _emit(parsers, args.o, args.tags, args.r)
    return 0