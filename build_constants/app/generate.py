from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from build_constants.foundation.config_io import find_repo_root, load_config
from build_constants.framework.config import (
    DEFAULT_PROJECT_GROUP,
    DEFAULT_PROJECT_VERSION,
    GeneratorConfig,
)
from build_constants.framework.constants import ConstantSet, build_constant_set
from build_constants.framework.generator import output_path, render_source, write_constants
from build_constants.framework.staleness import StalenessContract, declare_staleness, default_input_files

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GenerationPlan:
    """Everything one generation step needs, resolved from configuration and host defaults."""

    config: GeneratorConfig
    constant_set: ConstantSet
    contract: StalenessContract
    project_root: str
    config_meta: dict[str, Any]

    @property
    def output_file(self) -> Path:
        return output_path(self.contract.output_dir, self.constant_set.fully_qualified_name)


def _project_root(meta: dict[str, Any]) -> str:
    repo_root = meta.get("repo_root")
    if repo_root:
        return str(repo_root)
    config_dir = os.path.dirname(meta["paths"][0])
    try:
        return find_repo_root(config_dir)
    except FileNotFoundError:
        return config_dir


def plan_generation(
    *,
    config_path: str | os.PathLike[str] | None = None,
    output_dir: str | os.PathLike[str] | None = None,
    start_dir: str | os.PathLike[str] | None = None,
) -> GenerationPlan:
    """
    Load configuration, apply host defaults and validate the constant set.

    Nothing is written; validation failures surface before any filesystem change.
    """

    cfg, meta = load_config(config_path=config_path, start_dir=start_dir)
    project_root = _project_root(meta)
    config, warnings = GeneratorConfig.from_dict(cfg, base_dir=project_root)
    for warning in warnings:
        logger.warning("%s", warning)

    project = config.project
    constant_set = build_constant_set(
        config.classname,
        project_name=project.name or os.path.basename(os.path.normpath(project_root)),
        project_version=DEFAULT_PROJECT_VERSION if project.version is None else project.version,
        project_group=DEFAULT_PROJECT_GROUP if project.group is None else project.group,
        build_time_millis=config.build_time_millis,
        access=config.access,
        additional_constants=config.additional_constants,
    )

    resolved_output_dir = config.output_dir
    if output_dir is not None:
        resolved_output_dir = os.path.abspath(os.path.expandvars(os.path.expanduser(str(output_dir))))

    contract = declare_staleness(
        [*default_input_files(project_root, meta["paths"]), *config.inputs],
        resolved_output_dir,
    )
    logger.debug(
        "Config loaded (mode=%s): %s; %d declared input(s)",
        meta["mode"],
        ", ".join(meta["paths"]),
        len(contract.inputs),
    )

    return GenerationPlan(
        config=config,
        constant_set=constant_set,
        contract=contract,
        project_root=project_root,
        config_meta=meta,
    )


def inputs_report(plan: GenerationPlan) -> dict[str, Any]:
    """The staleness contract plus where the configuration came from, as JSON-ready data."""

    report = plan.contract.to_dict()
    report["config"] = {"mode": plan.config_meta["mode"], "paths": list(plan.config_meta["paths"])}
    return report


def render_plan(plan: GenerationPlan) -> str:
    return render_source(plan.constant_set)


def run_generation(plan: GenerationPlan) -> Path:
    path = write_constants(plan.constant_set, plan.contract.output_dir)
    logger.info(
        "Generated %s for %s %s",
        path,
        plan.constant_set.project_name,
        plan.constant_set.project_version,
    )
    return path
