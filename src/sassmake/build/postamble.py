"""Postamble cache.

The host build tool calls two hooks while writing its Makefile: one for extra
rules (the postamble) and one for the clean command. Either may be called
first, and either may be called more than once. Both must see the same target
graph, and the graph must be built exactly once per process.

Design:
    - PostambleCache owns the graph factory and a lock guarding its single run
    - A construction failure is memoized too and re-raised on every later call
    - Rendered text is cached, so repeated calls return identical strings
    - MakefileHooks adapts the cache to hooks that extend inherited output
"""

import logging
import threading
from typing import Callable, Optional

from .makefile_renderer import MakefileRenderer
from .targets import TargetGraph

logger = logging.getLogger(__name__)


class PostambleCache:
    """
    Lazily builds and memoizes the target graph and its rendered text.

    Example usage:
        cache = PostambleCache(lambda: builder.build(manifest, features))
        rules = cache.render_extra_rules()
        clean = cache.render_cleanup_list()
    """

    def __init__(
        self,
        graph_factory: Callable[[], TargetGraph],
        renderer: Optional[MakefileRenderer] = None,
    ):
        """
        Initialize cache.

        Args:
            graph_factory: Builds the target graph; called at most once
            renderer: Renderer for the host tool (default: MakefileRenderer())
        """
        self._graph_factory = graph_factory
        self._renderer = renderer or MakefileRenderer()
        self._lock = threading.Lock()
        self._initialized = False
        self._graph: Optional[TargetGraph] = None
        self._error: Optional[BaseException] = None
        self._rules: Optional[str] = None
        self._cleanup: Optional[str] = None

    def graph(self) -> TargetGraph:
        """
        Get the target graph, building it on first use.

        Returns:
            The memoized TargetGraph

        Raises:
            Exception: Whatever the first construction attempt raised
        """
        with self._lock:
            if not self._initialized:
                logger.debug("Building target graph")
                try:
                    graph = self._graph_factory()
                    self._rules = self._renderer.render_rules(graph)
                    self._cleanup = self._renderer.render_cleanup(graph)
                    self._graph = graph
                except BaseException as e:
                    # Interrupts included: the factory never runs a second time
                    self._error = e
                    raise
                finally:
                    self._initialized = True

            if self._error is not None:
                raise self._error
            assert self._graph is not None
            return self._graph

    def render_extra_rules(self) -> str:
        """Get the extra make rules for the postamble hook."""
        self.graph()
        assert self._rules is not None
        return self._rules

    def render_cleanup_list(self) -> str:
        """Get the clean command for the cleanup hook."""
        self.graph()
        assert self._cleanup is not None
        return self._cleanup


class MakefileHooks:
    """Appends the cached output to what the host's own hooks produce."""

    def __init__(self, cache: PostambleCache):
        self.cache = cache

    def postamble(self, inherited: str = "") -> str:
        """
        Extend the inherited postamble with the extra rules.

        Args:
            inherited: Output of the host's default postamble hook

        Returns:
            Combined postamble text
        """
        return "\n".join([inherited, "", self.cache.render_extra_rules()])

    def clean(self, inherited: str = "") -> str:
        """
        Extend the inherited clean rule with the generated artifacts.

        Args:
            inherited: Output of the host's default clean hook

        Returns:
            Combined clean rule text
        """
        return inherited + self.cache.render_cleanup_list()
