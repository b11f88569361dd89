"""Chart generation pipeline: corpus sets in, chart files out.

Each chart is built and rendered independently, so a chart that fails
(empty table, unwritable file) does not stop the others.
"""

from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional, Tuple

from config import NGRAM_LENGTHS, Config
from analysis.aggregates import AggregateEngine
from analysis.series import ChartSeriesBuilder, SeriesMode
from core.corpus import CorpusSet
from core.errors import EmptyTableError, RenderError
from render import get_renderer


UNIQUE_TITLE = "Unique N-Grams"


@dataclass(frozen=True)
class ChartRequest:
    """One chart of the plan."""

    title: str
    mode: SeriesMode
    length: Optional[int] = None
    use_reference: bool = False
    filtered: bool = False
    modifiers: str = ""
    suffix: str = ".svg"

    @property
    def name(self) -> str:
        return f"{self.title}{self.modifiers}"

    @property
    def file_name(self) -> str:
        return f"{self.name}{self.suffix}"


@dataclass
class PipelineResult:
    written: List[Path] = field(default_factory=list)
    failed: List[Tuple[ChartRequest, Exception]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed


def _per_length(modifiers: str, use_reference: bool = False, filtered: bool = False) -> List[ChartRequest]:
    return [
        ChartRequest(
            title=f"{n}-grams",
            mode=SeriesMode.BY_TOKEN_OCCURRENCE,
            length=n,
            use_reference=use_reference,
            filtered=filtered,
            modifiers=modifiers,
        )
        for n in NGRAM_LENGTHS
    ]


def build_chart_plan(has_reference: bool, overviews: bool = False) -> List[ChartRequest]:
    """Charts of a full run, in output order.

    Filtered charts compare the truncated subject with the full reference.
    """
    plan = [
        ChartRequest(UNIQUE_TITLE, SeriesMode.BY_LENGTH_TOTALS),
        ChartRequest(UNIQUE_TITLE, SeriesMode.BY_LENGTH_GROWTH_RATIO, modifiers=" (increase)"),
        *_per_length(""),
    ]

    if has_reference:
        plan += [
            ChartRequest(UNIQUE_TITLE, SeriesMode.BY_LENGTH_TOTALS,
                         use_reference=True, modifiers=" (referenced)"),
            ChartRequest(UNIQUE_TITLE, SeriesMode.BY_LENGTH_GROWTH_RATIO,
                         use_reference=True, modifiers=" (referenced + increase)"),
            *_per_length(" (referenced)", use_reference=True),
        ]

    plan += _per_length(" (filtered)", filtered=True)
    if has_reference:
        plan += _per_length(" (filtered + referenced)", use_reference=True, filtered=True)

    if overviews:
        plan += [
            ChartRequest(UNIQUE_TITLE, SeriesMode.BY_LENGTH_TOTALS,
                         modifiers=" (overview)", suffix=".png"),
            ChartRequest(UNIQUE_TITLE, SeriesMode.BY_LENGTH_GROWTH_RATIO,
                         modifiers=" (increase overview)", suffix=".png"),
        ]

    return plan


class ChartPipeline:
    """Builds and renders the charts of a plan."""

    def __init__(
        self,
        config: Config,
        builder: Optional[ChartSeriesBuilder] = None,
        renderer_factory: Callable = get_renderer,
    ):
        self.config = config
        self.engine = AggregateEngine()
        self.builder = builder or ChartSeriesBuilder(self.engine)
        self.renderer_factory = renderer_factory

    def render_chart(
        self,
        request: ChartRequest,
        subject: CorpusSet,
        reference: Optional[CorpusSet] = None,
    ) -> Path:
        """Build and render a single chart.

        Raises:
            EmptyTableError: If the chart needs a maximum of an empty table
            RenderError: If the renderer cannot write the file
        """
        chart = self.builder.build(
            request.mode,
            subject,
            reference=reference if request.use_reference else None,
            length=request.length,
            title=request.name,
        )
        path = Path(self.config.output_dir) / request.file_name
        renderer = self.renderer_factory(path, self.config.canvas_size)
        return renderer.render(chart, path)

    def run(
        self,
        subject: CorpusSet,
        reference: Optional[CorpusSet] = None,
        plan: Optional[List[ChartRequest]] = None,
        on_progress: Optional[Callable[[str, int, int], None]] = None,
    ) -> PipelineResult:
        """
        Render all charts of a plan.

        Args:
            subject: Corpus being analyzed (never modified)
            reference: Optional comparison corpus
            plan: Charts to produce (default: build_chart_plan())
            on_progress: Callback(chart_name, done, total)

        Returns:
            PipelineResult with written paths and per-chart failures
        """
        if plan is None:
            plan = build_chart_plan(reference is not None, self.config.overviews)

        if reference is None and any(r.use_reference for r in plan):
            raise ValueError("Plan contains referenced charts but no reference corpus was given")

        filtered = None
        if any(r.filtered for r in plan):
            filtered = self.engine.truncate(subject, self.config.filter_limits)

        def job(request: ChartRequest) -> Path:
            source = filtered if request.filtered else subject
            return self.render_chart(request, source, reference)

        result = PipelineResult()
        total = len(plan)
        done = 0

        def record(request: ChartRequest, outcome):
            nonlocal done
            done += 1
            if isinstance(outcome, Exception):
                print(f"Error: {request.file_name}: {outcome}")
                result.failed.append((request, outcome))
            else:
                result.written.append(outcome)
            if on_progress:
                on_progress(request.file_name, done, total)

        if self.config.workers > 1:
            with ThreadPoolExecutor(max_workers=self.config.workers) as executor:
                futures = {executor.submit(job, request): request for request in plan}
                for future in as_completed(futures):
                    request = futures[future]
                    try:
                        outcome = future.result()
                    except (EmptyTableError, RenderError) as e:
                        outcome = e
                    record(request, outcome)
        else:
            for request in plan:
                try:
                    outcome = job(request)
                except (EmptyTableError, RenderError) as e:
                    outcome = e
                record(request, outcome)

        return result
