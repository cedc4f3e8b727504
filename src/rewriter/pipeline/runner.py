# topmark:header:start
#
#   project      : Rewriter
#   file         : runner.py
#   file_relpath : src/rewriter/pipeline/runner.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Run one pipeline invocation: assemble, expose the entry point, finish.

A `Pipeline` is single-use. It assembles its chain once in ``init()``,
hands out the generator (``entry_point()``) and its raw input writer
(``get_writer()``), and drains the chain in ``finish()``.

``finish()`` applies the single-unwrap policy of
[`unwrap_fault`][rewriter.pipeline.errors.unwrap_fault]: whatever fault the
generator's completion hook raises, the caller observes exactly one `OSError`.

Typical usage:

    pipeline = Pipeline(StageRegistry())
    pipeline.init(ctx, description)
    pipeline.get_writer().write(text)
    pipeline.finish()
"""

from __future__ import annotations

from typing import TYPE_CHECKING
from xml.sax import SAXException

from rewriter.config.logging import get_logger
from rewriter.pipeline.assembler import assemble
from rewriter.pipeline.errors import PipelineStateError, unwrap_fault
from rewriter.pipeline.status import PipelineState, can_transition

if TYPE_CHECKING:
    from types import TracebackType
    from typing import TextIO
    from xml.sax.handler import ContentHandler

    from rewriter.config.descriptors import PipelineDescription
    from rewriter.config.logging import RewriterLogger
    from rewriter.pipeline.assembler import AssembledPipeline
    from rewriter.pipeline.context import ProcessingContext
    from rewriter.pipeline.contracts import Generator
    from rewriter.pipeline.factory import InjectedTransformers, StageFactory

logger: RewriterLogger = get_logger(__name__)


class Pipeline:
    """One pipeline invocation.

    Args:
        factory (StageFactory): Resolves stage type names; also supplies the
            injected transformers when ``init()`` is not given any.

    Attributes:
        factory (StageFactory): The stage factory.
    """

    factory: StageFactory

    def __init__(self, factory: StageFactory) -> None:
        self.factory = factory
        self._state: PipelineState = PipelineState.UNINITIALIZED
        self._assembled: AssembledPipeline | None = None

    def __repr__(self) -> str:
        return f"Pipeline(state={self._state.value!r})"

    @property
    def state(self) -> PipelineState:
        """Return the current lifecycle state."""
        return self._state

    @property
    def assembled(self) -> AssembledPipeline:
        """Return the assembled chain.

        Raises:
            PipelineStateError: If the pipeline was not (successfully) assembled.
        """
        if self._assembled is None:
            raise PipelineStateError(
                f"Pipeline is not assembled (state: {self._state.value})",
                state=self._state.value,
            )
        return self._assembled

    def _transition(self, target: PipelineState) -> None:
        if not can_transition(self._state, target):
            raise PipelineStateError(
                f"Invalid pipeline transition {self._state.value} -> {target.value}",
                state=self._state.value,
                target=target.value,
            )
        logger.debug("Pipeline state: %s -> %s", self._state.value, target.value)
        self._state = target

    def init(
        self,
        ctx: ProcessingContext,
        description: PipelineDescription,
        injected: InjectedTransformers | None = None,
    ) -> None:
        """Assemble the chain for this invocation.

        Args:
            ctx (ProcessingContext): The processing context for all stages.
            description (PipelineDescription): The pipeline to build.
            injected (InjectedTransformers | None): Transformers to inject; when
                ``None``, ``factory.injected_transformers()`` is asked once.

        Raises:
            PipelineStateError: If the pipeline was already initialized.
            ResolutionError: If a stage type cannot be resolved.
            InitializationError: If a stage rejects its configuration.
        """
        self._transition(PipelineState.ASSEMBLING)
        try:
            if injected is None:
                injected = self.factory.injected_transformers()
            assembled: AssembledPipeline = assemble(ctx, description, injected, self.factory)
        except Exception:
            logger.error(
                "Pipeline assembly failed (generator=%s, serializer=%s)",
                description.generator.type_name,
                description.serializer.type_name,
            )
            self._transition(PipelineState.FAILED)
            raise
        self._assembled = assembled
        self._transition(PipelineState.READY)

    def _start(self) -> AssembledPipeline:
        assembled: AssembledPipeline = self.assembled
        if self._state == PipelineState.READY:
            self._transition(PipelineState.RUNNING)
        elif self._state != PipelineState.RUNNING:
            raise PipelineStateError(
                f"Pipeline is not runnable (state: {self._state.value})",
                state=self._state.value,
            )
        return assembled

    def entry_point(self) -> Generator:
        """Return the generator the caller drives.

        Raises:
            PipelineStateError: If the pipeline is not assembled or already done.
        """
        return self._start().generator

    def get_writer(self) -> TextIO:
        """Return the generator's writer for raw input.

        Raises:
            PipelineStateError: If the pipeline is not assembled or already done.
        """
        return self._start().generator.get_writer()

    def chain_head(self) -> ContentHandler:
        """Return the first event consumer: the first transformer, else the serializer.

        Raises:
            PipelineStateError: If the pipeline is not assembled.
        """
        return self.assembled.chain_head

    def finish(self) -> None:
        """Signal the generator to complete, then report any fault once.

        The generator's completion hook is invoked at most once per pipeline.

        Raises:
            OSError: The `OSError` wrapped by a processing fault, verbatim; or a
                [`PipelineIOError`][rewriter.pipeline.errors.PipelineIOError]
                whose ``__cause__`` is the fault.
            PipelineStateError: If the pipeline is not assembled or already done.
        """
        generator: Generator = self._start().generator
        try:
            generator.finished()
        except SAXException as fault:
            logger.error("Pipeline fault while finishing: %s", fault)
            self._transition(PipelineState.FAILED)
            raise unwrap_fault(fault)  # noqa: B904
        except Exception:
            self._transition(PipelineState.FAILED)
            raise
        self._transition(PipelineState.FINISHED)

    def __enter__(self) -> Pipeline:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        # Only drain a pipeline that was actually started and is still live.
        if exc_type is None and self._state in (PipelineState.READY, PipelineState.RUNNING):
            self.finish()
