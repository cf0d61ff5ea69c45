# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

from datetime import datetime, timedelta, timezone

import pytest

from taskenv_lib.core.error import SpecError, UnitNotFoundError
from taskenv_lib.properties.window import Window
from taskenv_lib.specs.job import (
    DependencyType,
    JobAssets,
    JobSpec,
    JobSpecAsset,
    JobSpecBehavior,
    JobSpecConfigItem,
    JobSpecHook,
    JobSpecSchedule,
    JobSpecTask,
)
from taskenv_lib.specs.unit import Unit

UTC = timezone.utc

JOB_YAML = """
name: foo
owner: mee@mee
behavior:
  depends_on_past: true
schedule:
  start_date: 2020-11-01
  interval: "0 2 * * *"
task:
  name: bq
  priority: 2000
  window:
    size: 24h
    offset: "0"
    truncate_to: d
  config:
    BQ_VAL: "22"
    EXECT: "{{.EXECUTION_TIME}}"
hooks:
  - name: transporter
    config:
      - name: FILTER_EXPRESSION
        value: "event_timestamp > {{.DSTART}}"
      - name: PRODUCER_CONFIG_RETRIES
        value: 5
dependencies:
  - job: bar
  - job: baz
    project: other
    type: inter
"""


@pytest.fixture
def job_dir(tmp_path):
    (tmp_path / "job.yaml").write_text(JOB_YAML)
    assets = tmp_path / "assets"
    assets.mkdir()
    (assets / "query.sql").write_text("select * from table WHERE event_timestamp > '{{.EXECUTION_TIME}}'")
    (assets / "readme.md").write_text("plain text")
    (assets / "nested").mkdir()
    return tmp_path


def _minimal(**extra):
    data = {
        "name": "foo",
        "schedule": {"start_date": "2020-11-01T00:00:00Z"},
        "task": {"name": "bq"},
    }
    data.update(extra)
    return data


def test_dependency_type_from_str():
    assert DependencyType.fromStr("intra") == DependencyType.INTRA
    assert DependencyType.fromStr("INTER") == DependencyType.INTER
    assert str(DependencyType.INTER) == "inter"


def test_dependency_type_from_str_invalid():
    with pytest.raises(SpecError, match="Unknown dependency type 'cross'"):
        DependencyType.fromStr("cross")


def test_job_from_file_directory(job_dir):
    job = JobSpec.fromFile(job_dir)

    assert job.name == "foo"
    assert job.owner == "mee@mee"
    assert job.behavior == JobSpecBehavior(catch_up=True, depends_on_past=True)
    assert job.schedule == JobSpecSchedule(
        start_date=datetime(2020, 11, 1, tzinfo=UTC), interval="0 2 * * *"
    )

    assert job.task.unit == Unit("bq")
    assert job.task.priority == 2000
    assert job.task.window == Window(size=timedelta(days=1), truncate_to="d")
    assert job.task.config == (
        JobSpecConfigItem("BQ_VAL", "22"),
        JobSpecConfigItem("EXECT", "{{.EXECUTION_TIME}}"),
    )

    assert len(job.hooks) == 1
    assert job.hooks[0].unit.getName() == "transporter"
    assert job.hooks[0].config == (
        JobSpecConfigItem("FILTER_EXPRESSION", "event_timestamp > {{.DSTART}}"),
        JobSpecConfigItem("PRODUCER_CONFIG_RETRIES", "5"),
    )

    assert [d.job for d in job.dependencies] == ["bar", "baz"]
    assert job.dependencies[0].type == DependencyType.INTRA
    assert job.dependencies[0].project is None
    assert job.dependencies[1].type == DependencyType.INTER
    assert job.dependencies[1].project == "other"

    assert [a.name for a in job.assets] == ["query.sql", "readme.md"]
    assert job.assets.getByName("readme.md").value == "plain text"  # ty: ignore[possibly-missing-attribute]


def test_job_from_file_path(job_dir):
    assert JobSpec.fromFile(job_dir / "job.yaml") == JobSpec.fromFile(job_dir)


def test_job_from_file_without_assets_dir(tmp_path):
    (tmp_path / "job.yaml").write_text(JOB_YAML)

    job = JobSpec.fromFile(tmp_path)

    assert len(job.assets) == 0


def test_job_from_file_missing(tmp_path):
    with pytest.raises(SpecError, match="does not exist"):
        JobSpec.fromFile(tmp_path)


def test_job_from_file_invalid_yaml(tmp_path):
    (tmp_path / "job.yaml").write_text("name: [foo\n")

    with pytest.raises(SpecError, match="Could not parse"):
        JobSpec.fromFile(tmp_path)


def test_job_from_file_inline_and_file_asset_clash(job_dir):
    (job_dir / "job.yaml").write_text(JOB_YAML + "assets:\n  query.sql: select 1\n")

    with pytest.raises(SpecError, match="both inline and as files: query.sql"):
        JobSpec.fromFile(job_dir)


def test_job_from_dict_minimal():
    job = JobSpec.fromDict(_minimal())

    assert job.name == "foo"
    assert job.owner == ""
    assert job.behavior == JobSpecBehavior()
    assert job.schedule.start_date == datetime(2020, 11, 1, tzinfo=UTC)
    assert job.schedule.end_date is None
    assert job.task.window == Window()
    assert job.task.config == ()
    assert job.hooks == ()
    assert job.dependencies == ()
    assert len(job.assets) == 0


def test_job_from_dict_inline_assets_merged_with_file_assets():
    job = JobSpec.fromDict(
        _minimal(assets={"b.sql": "select 2"}), file_assets={"a.sql": "select 1"}
    )

    assert job.assets.toDict() == {"a.sql": "select 1", "b.sql": "select 2"}


def test_job_from_dict_config_keeps_order():
    config = {"Z": "1", "A": "{{.Z}}", "M": "{{.A}}"}
    job = JobSpec.fromDict(_minimal(task={"name": "bq", "config": config}))

    assert [item.name for item in job.task.config] == ["Z", "A", "M"]


def test_job_from_dict_end_date():
    schedule = {"start_date": "2020-11-01", "end_date": "2021-01-01T00:00:00+01:00"}
    job = JobSpec.fromDict(_minimal(schedule=schedule))

    assert job.schedule.end_date == datetime(
        2021, 1, 1, tzinfo=timezone(timedelta(hours=1))
    )


@pytest.mark.parametrize(
    "data,message",
    [
        ({"schedule": {"start_date": "2020-11-01"}, "task": {"name": "bq"}}, "'name' is missing"),
        (_minimal(schedule=None), "'start_date' is missing"),
        (_minimal(schedule={"interval": "@daily"}), "'start_date' is missing"),
        (_minimal(task=None), "'name' is missing in task"),
        (_minimal(task={"name": 5}), "must be of type 'str'"),
        (_minimal(task="bq"), "'task' of job 'foo' must be a mapping"),
        (_minimal(hooks={"name": "h"}), "'hooks' of job 'foo' must be a list"),
        (_minimal(hooks=[{"config": {}}]), "'name' is missing in hook"),
        (_minimal(task={"name": "bq", "config": "A=1"}), "must be a mapping or a list"),
        (_minimal(task={"name": "bq", "config": [{"value": "1"}]}), "Invalid configuration entry"),
        (_minimal(dependencies=[{"job": "bar", "type": "cross"}]), "Unknown dependency type"),
        (_minimal(task={"name": "bq", "window": {"size": "forever"}}), "Invalid window"),
        (_minimal(task={"name": "bq", "priority": "high"}), "Invalid job specification"),
        (_minimal(schedule={"start_date": "yesterday"}), "Invalid job specification"),
        (_minimal(assets=["query.sql"]), "'assets' of job 'foo' must be a mapping"),
    ],
)
def test_job_from_dict_invalid(data, message):
    with pytest.raises(SpecError, match=message):
        JobSpec.fromDict(data)


def test_job_from_file_keeps_config_values_as_written(tmp_path):
    (tmp_path / "job.yaml").write_text(
        """
name: foo
schedule:
  start_date: 2020-11-01
task:
  name: bq
  config:
    START: 12:30
    MODE: 0o17
    FLAG: on
    HEX: 0x1F
    EMPTY:
hooks:
  - name: transporter
    config:
      - name: RETRIES
        value: 010
assets:
  limit.txt: 1_000
"""
    )

    job = JobSpec.fromFile(tmp_path)

    assert job.task.config == (
        JobSpecConfigItem("START", "12:30"),
        JobSpecConfigItem("MODE", "0o17"),
        JobSpecConfigItem("FLAG", "on"),
        JobSpecConfigItem("HEX", "0x1F"),
        JobSpecConfigItem("EMPTY", ""),
    )
    assert job.hooks[0].config == (JobSpecConfigItem("RETRIES", "010"),)
    assert job.assets.toDict() == {"limit.txt": "1_000"}


def test_job_from_file_empty_sections(tmp_path):
    (tmp_path / "job.yaml").write_text(
        "name: foo\nbehavior:\nschedule:\n  start_date: 2020-11-01\n  end_date:\n"
        "task:\n  name: bq\n  window:\n  config:\nhooks:\ndependencies:\nassets:\n"
    )

    job = JobSpec.fromFile(tmp_path)

    assert job.behavior == JobSpecBehavior()
    assert job.schedule.end_date is None
    assert job.task.window == Window()
    assert job.task.config == ()
    assert job.hooks == ()
    assert job.dependencies == ()
    assert len(job.assets) == 0


@pytest.mark.parametrize(
    "behavior,expected",
    [
        ({"catch_up": "false"}, JobSpecBehavior(catch_up=False)),
        ({"catch_up": "False", "depends_on_past": "TRUE"}, JobSpecBehavior(False, True)),
        ({"catch_up": False, "depends_on_past": True}, JobSpecBehavior(False, True)),
        ({"depends_on_past": " true "}, JobSpecBehavior(depends_on_past=True)),
        ({}, JobSpecBehavior()),
    ],
)
def test_job_from_dict_behavior_flags(behavior, expected):
    assert JobSpec.fromDict(_minimal(behavior=behavior)).behavior == expected


@pytest.mark.parametrize("value", ["no", "off", "yes", "0", "maybe", 1])
def test_job_from_dict_behavior_flag_invalid(value):
    with pytest.raises(SpecError, match="'catch_up' of job 'foo' must be 'true' or 'false'"):
        JobSpec.fromDict(_minimal(behavior={"catch_up": value}))


def test_job_from_file_behavior_flags(tmp_path):
    (tmp_path / "job.yaml").write_text(
        JOB_YAML.replace("depends_on_past: true", "depends_on_past: true\n  catch_up: 'false'")
    )

    job = JobSpec.fromFile(tmp_path)

    assert job.behavior == JobSpecBehavior(catch_up=False, depends_on_past=True)


def test_job_assets_sorted_by_name():
    assets = JobAssets((JobSpecAsset("b", "2"), JobSpecAsset("a", "1")))

    assert [a.name for a in assets] == ["a", "b"]
    assert assets.toDict() == {"a": "1", "b": "2"}
    assert len(assets) == 2
    assert assets.getByName("c") is None


def test_job_assets_order_does_not_matter():
    assert JobAssets.fromDict({"a": "1", "b": "2"}) == JobAssets.fromDict(
        {"b": "2", "a": "1"}
    )


def test_job_assets_duplicates():
    with pytest.raises(SpecError, match="multiple times: a"):
        JobAssets((JobSpecAsset("a", "1"), JobSpecAsset("a", "2")))


def _job_with_hooks(*names):
    return JobSpec(
        name="foo",
        owner="",
        behavior=JobSpecBehavior(),
        schedule=JobSpecSchedule(datetime(2020, 11, 1, tzinfo=UTC), "@daily"),
        task=JobSpecTask(unit=Unit("bq")),
        hooks=tuple(JobSpecHook(unit=Unit(n)) for n in names),
    )


def test_get_hook_by_name():
    job = _job_with_hooks("transporter", "predator")

    assert job.getHookByName("predator").unit == Unit("predator")


def test_get_hook_by_name_missing():
    job = _job_with_hooks("transporter")

    with pytest.raises(UnitNotFoundError, match="Hook 'unknown-hook' is not defined for job 'foo'"):
        job.getHookByName("unknown-hook")


def test_get_hook_by_name_duplicate():
    job = _job_with_hooks("transporter", "transporter")

    with pytest.raises(UnitNotFoundError, match="defined 2 times"):
        job.getHookByName("transporter")
