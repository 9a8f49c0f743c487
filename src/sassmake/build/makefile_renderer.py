"""
Makefile rendering.

Serializes a TargetGraph into make syntax understood by the generated
ExtUtils::MakeMaker style Makefile:

    LIBSASS_OBJ = libsass/src/cencode.o libsass/src/ast.o
    LIBSASS_LIB = $(INST_LIB)/libsass.$(SO)
    $(LIBSASS_LIB): $(LIBSASS_OBJ)
    	$(LD) $(OPTIMIZE) -lstdc++ -shared -o $(LIBSASS_LIB) $(LIBSASS_OBJ)

    pure_all :: $(LIBSASS_LIB)
"""

from typing import List

from .compile_options import CompileOptions
from .recipes import CORE_OBJECTS, OBJECTS, OUTPUT
from .targets import BuildTarget, TargetGraph


def _ref(variable: str) -> str:
    return f"$({variable})"


class MakefileRenderer:
    """Renders target graphs as make rules and clean entries."""

    DEFAULT_GOAL = "pure_all"
    REMOVE_COMMAND = "$(RM_F)"

    def render_compile_options(self, options: CompileOptions) -> str:
        """
        Render the compile settings as variable assignments.

        Assignments to INC, DEFINE and OPTIMIZE replace the host tool's
        defaults; extra compiler flags are appended to CCFLAGS.

        Args:
            options: Assembled compile options

        Returns:
            Assignment lines
        """
        lines = [
            f"INC = {' '.join(options.include_args())}",
            f"DEFINE = {' '.join(options.define_args())}",
            f"OPTIMIZE = {options.optimize}",
        ]
        if options.flags:
            lines.append(f"CCFLAGS += {' '.join(options.flags)}")
        return "\n".join(lines) + "\n"

    def render_rules(self, graph: TargetGraph) -> str:
        """
        Render all targets followed by the default goal rule.

        Args:
            graph: Target graph to render

        Returns:
            Rule text, blocks separated by a blank line
        """
        blocks = [self.render_target(target, graph.core) for target in graph.targets]
        blocks.append(self.render_default_goal(graph))
        return "\n\n".join(blocks) + "\n"

    def render_target(self, target: BuildTarget, core: BuildTarget) -> str:
        lines: List[str] = [
            f"{target.objects_variable} = {' '.join(target.objects)}",
            f"{target.output_variable} = {target.output}",
        ]

        for rule in target.compile_rules:
            lines.append(f"{rule.object_file}:")
            lines.append("\t" + " ".join(rule.arguments))

        prerequisites = [_ref(dep.output_variable) for dep in target.dependencies]
        prerequisites.append(_ref(target.objects_variable))
        lines.append(f"{_ref(target.output_variable)}: {' '.join(prerequisites)}")

        substitutions = {
            OUTPUT: _ref(target.output_variable),
            OBJECTS: _ref(target.objects_variable),
            CORE_OBJECTS: _ref(core.objects_variable),
        }
        for command in target.recipe.render(substitutions):
            lines.append("\t" + command)

        return "\n".join(lines)

    def render_default_goal(self, graph: TargetGraph) -> str:
        outputs = [_ref(target.output_variable) for target in graph.leaves()]
        return f"{self.DEFAULT_GOAL} :: {' '.join(outputs)}"

    def render_cleanup(self, graph: TargetGraph) -> str:
        """
        Render the clean command removing every generated artifact.

        Returns:
            Command text, one artifact per continued line
        """
        lines = [f"\t- {self.REMOVE_COMMAND} \\"]
        files = list(graph.cleanup_files)
        for i, path in enumerate(files):
            continuation = " \\" if i < len(files) - 1 else ""
            lines.append(f"\t  {path}{continuation}")
        return "\n".join(lines) + "\n"
