from splurge_tree_scaffold.context import PipelineContext
from splurge_tree_scaffold.events import EventBus, StepCompletedEvent, StepStartedEvent
from splurge_tree_scaffold.pipeline import Job, Pipeline, Step, Task
from splurge_tree_scaffold.result import Result


class DummyEventBus:
    def __init__(self):
        self.published = []

    def publish(self, event):
        self.published.append(event)


class AddOneStep(Step):
    def execute(self, context: PipelineContext, input_data: int) -> Result[int]:
        return Result.success(input_data + 1, {f"{self.name}_seen": input_data})


class FailStep(Step):
    def execute(self, context: PipelineContext, input_data: int) -> Result[int]:
        return Result.failure(RuntimeError("boom"), {"line": 7})


class ExceptionStep(Step):
    """Step that raises an exception during execution."""

    def execute(self, context: PipelineContext, input_data: int) -> Result[int]:
        raise RuntimeError("Test exception in step")


class WarningStep(Step):
    """Step that returns a warning result."""

    def execute(self, context: PipelineContext, input_data: int) -> Result[int]:
        return Result.warning(input_data, [f"warning from {self.name}"])


def make_context():
    return PipelineContext.create(source_file="example.tree", run_id="test")


def test_task_happy_path():
    eb = DummyEventBus()
    task = Task("t", [AddOneStep("s1", eb), AddOneStep("s2", eb)], eb)

    res = task.execute(make_context(), 0)

    assert res.is_success()
    assert res.data == 2
    assert len(task.steps) == 2


def test_task_failure_short_circuits():
    eb = DummyEventBus()
    after = AddOneStep("after", eb)
    task = Task("t2", [AddOneStep("ok", eb), FailStep("bad", eb), after], eb)

    res = task.execute(make_context(), 0)

    assert res.is_error()
    assert str(res.error) == "boom"
    assert res.metadata["failed_step"] == "bad"
    assert res.metadata["step_index"] == 1
    assert res.metadata["line"] == 7
    assert not any(getattr(event, "step_name", None) == "after" for event in eb.published)


def test_step_exception_becomes_failure():
    eb = DummyEventBus()
    res = ExceptionStep("explode", eb).run(make_context(), 1)

    assert res.is_error()
    assert isinstance(res.error, RuntimeError)
    assert res.metadata["step"] == "explode"


def test_step_run_publishes_events():
    bus = EventBus()
    seen = []
    bus.subscribe(StepStartedEvent, seen.append)
    bus.subscribe(StepCompletedEvent, seen.append)

    AddOneStep("s", bus).run(make_context(), 1)

    assert [type(event) for event in seen] == [StepStartedEvent, StepCompletedEvent]
    assert seen[1].result.data == 2
    assert seen[1].duration_ms >= 0


def test_task_merges_warnings():
    eb = DummyEventBus()
    task = Task("t", [WarningStep("w1", eb), AddOneStep("s", eb), WarningStep("w2", eb)], eb)

    res = task.execute(make_context(), 1)

    assert res.is_warning()
    assert res.data == 2
    assert res.warnings == ["warning from w1", "warning from w2"]


def test_empty_task_passes_input_through():
    eb = DummyEventBus()

    assert Task("empty", [], eb).execute(make_context(), 5).data == 5


def test_job_threading_and_counts():
    eb = DummyEventBus()
    job = Job("j", [Task("a", [AddOneStep("s", eb)], eb), Task("b", [AddOneStep("s", eb)], eb)], eb)

    res = job.execute(make_context(), 3)

    assert res.is_success()
    assert res.data == 5
    assert len(job.tasks) == 2


def test_job_failure_keeps_step_metadata():
    eb = DummyEventBus()
    job = Job("j", [Task("a", [AddOneStep("s", eb)], eb), Task("b", [FailStep("bad", eb)], eb)], eb)

    res = job.execute(make_context(), 0)

    assert res.is_error()
    assert res.metadata["failed_task"] == "b"
    assert res.metadata["task_index"] == 1
    assert res.metadata["failed_step"] == "bad"
    assert res.metadata["line"] == 7


def test_pipeline_accumulates_job_metadata():
    eb = DummyEventBus()
    first = Job("first", [Task("a", [AddOneStep("one", eb)], eb)], eb)
    second = Job("second", [Task("b", [AddOneStep("two", eb), WarningStep("w", eb)], eb)], eb)
    pipeline = Pipeline("p", [first, second], eb)

    res = pipeline.execute(make_context(), 0)

    assert res.is_warning()
    assert res.data == 2
    assert res.warnings == ["warning from w"]
    assert res.metadata["one_seen"] == 0
    assert len(pipeline.jobs) == 2


def test_pipeline_failure_names_the_job():
    eb = DummyEventBus()
    first = Job("first", [Task("a", [AddOneStep("one", eb)], eb)], eb)
    second = Job("second", [Task("b", [FailStep("bad", eb)], eb)], eb)

    res = Pipeline("p", [first, second], eb).execute(make_context(), 0)

    assert res.is_error()
    assert res.metadata["failed_job"] == "second"
    assert res.metadata["job_index"] == 1
    assert res.metadata["one_seen"] == 0


def test_pipeline_without_jobs():
    eb = DummyEventBus()

    res = Pipeline("p", [], eb).execute(make_context(), "input")

    assert res.is_success()
    assert res.data == "input"
