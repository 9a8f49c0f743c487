"""
Unit tests for the build target model.
"""

import pytest

from sassmake.build.recipes import LinkRecipe
from sassmake.build.targets import (
    BuildTarget,
    InvalidTargetError,
    TargetGraph,
    TargetKind,
    collect_cleanup,
)

RECIPE = LinkRecipe(arguments=("ld",))


def make_core(objects=("a.o", "b.o")):
    return BuildTarget(
        name="libsass",
        kind=TargetKind.LIBRARY,
        variable="LIBSASS",
        output="libsass.so",
        objects=tuple(objects),
        recipe=RECIPE,
    )


def make_plugin(name, core, objects=("p.o",)):
    return BuildTarget(
        name=name,
        kind=TargetKind.PLUGIN,
        variable=name.upper(),
        output=f"{name}.so",
        objects=tuple(objects),
        recipe=RECIPE,
        dependencies=(core,) if core else (),
        optional=True,
    )


class TestBuildTarget:
    """Test suite for BuildTarget invariants."""

    def test_variables(self):
        core = make_core()
        cli = BuildTarget(
            name="sassc",
            kind=TargetKind.EXECUTABLE,
            variable="SASSC",
            output="sassc",
            objects=("sassc.o",),
            recipe=RECIPE,
            dependencies=(core,),
        )

        assert core.objects_variable == "LIBSASS_OBJ"
        assert core.output_variable == "LIBSASS_LIB"
        assert cli.output_variable == "SASSC_EXE"
        assert cli.depends_on(core)
        assert not core.depends_on(cli)

    def test_zero_objects_invalid(self):
        with pytest.raises(InvalidTargetError, match="no object files"):
            make_core(objects=())

    def test_plugin_without_core_invalid(self):
        with pytest.raises(InvalidTargetError, match="core library"):
            make_plugin("math", core=None)

    def test_plugin_with_zero_objects_invalid(self):
        with pytest.raises(InvalidTargetError):
            make_plugin("math", make_core(), objects=())

    def test_library_with_dependencies_invalid(self):
        core = make_core()
        with pytest.raises(InvalidTargetError, match="must not depend"):
            BuildTarget(
                name="other",
                kind=TargetKind.LIBRARY,
                variable="OTHER",
                output="other.so",
                objects=("o.o",),
                recipe=RECIPE,
                dependencies=(core,),
            )

    def test_artifacts(self):
        target = BuildTarget(
            name="libsass",
            kind=TargetKind.LIBRARY,
            variable="LIBSASS",
            output="sass.dll",
            objects=("a.o",),
            recipe=RECIPE,
            side_outputs=("sass.dll.a",),
        )

        assert target.artifacts() == ["a.o", "sass.dll", "sass.dll.a"]


class TestTargetGraph:
    """Test suite for TargetGraph ordering and queries."""

    def test_leaves_and_dependents(self):
        core = make_core()
        glob = make_plugin("glob", core)
        math = make_plugin("math", core)
        graph = TargetGraph(
            targets=(core, glob, math),
            cleanup_files=collect_cleanup((core, glob, math)),
        )

        assert graph.core is core
        assert graph.names() == ["libsass", "glob", "math"]
        assert graph.dependents(core) == [glob, math]
        assert graph.leaves() == [glob, math]
        assert graph.get("math") is math
        assert graph.get("digest") is None

    def test_core_alone_is_leaf(self):
        core = make_core()
        graph = TargetGraph(targets=(core,), cleanup_files=collect_cleanup((core,)))

        assert graph.leaves() == [core]

    def test_empty_graph_invalid(self):
        with pytest.raises(InvalidTargetError, match="empty"):
            TargetGraph(targets=(), cleanup_files=())

    def test_core_must_come_first(self):
        core = make_core()
        glob = make_plugin("glob", core)

        with pytest.raises(InvalidTargetError):
            TargetGraph(targets=(glob, core), cleanup_files=())

    def test_dependency_must_be_in_graph(self):
        core = make_core()
        other = BuildTarget(
            name="other",
            kind=TargetKind.LIBRARY,
            variable="OTHER",
            output="other.so",
            objects=("o.o",),
            recipe=RECIPE,
        )
        glob = make_plugin("glob", other)

        with pytest.raises(InvalidTargetError, match="before its dependency"):
            TargetGraph(targets=(core, glob), cleanup_files=())

    def test_duplicate_names_invalid(self):
        core = make_core()
        glob = make_plugin("glob", core)

        with pytest.raises(InvalidTargetError, match="Duplicate"):
            TargetGraph(targets=(core, glob, glob), cleanup_files=())

    def test_collect_cleanup_unique_in_order(self):
        core = make_core(objects=("a.o", "shared.o"))
        glob = make_plugin("glob", core, objects=("shared.o", "g.o"))

        assert collect_cleanup((core, glob)) == ("a.o", "shared.o", "libsass.so", "g.o", "glob.so")
