"""Writes the agent log and the results bundle into a run's artifacts directory."""

import hashlib
from pathlib import Path

from change_eval.agent.domain.log import StandardLog
from change_eval.config.domain.config import EvalConfig
from change_eval.evaluation.domain.bundle import ResultsBundle

AGENT_LOG_FILE_NAME = "agent-log.json"
RESULTS_FILE_NAME = "results.json"
_CONFIG_HASH_LENGTH = 16


def config_hash(cfg: EvalConfig) -> str:
    """First 16 hex chars of the SHA-256 of the config's JSON rendering."""
    digest = hashlib.sha256(cfg.model_dump_json().encode("utf-8")).hexdigest()
    return digest[:_CONFIG_HASH_LENGTH]


def save_agent_log(artifacts_dir: Path, log: StandardLog) -> Path:
    path = artifacts_dir / AGENT_LOG_FILE_NAME
    path.write_text(log.model_dump_json(indent=2), encoding="utf-8")
    return path


def save_bundle(artifacts_dir: Path, bundle: ResultsBundle) -> Path:
    path = artifacts_dir / RESULTS_FILE_NAME
    path.write_text(bundle.model_dump_json(indent=2), encoding="utf-8")
    return path


def load_bundle(path: Path) -> ResultsBundle:
    return ResultsBundle.model_validate_json(path.read_text(encoding="utf-8"))


def list_evaluator_artifacts(artifacts_dir: Path) -> list[str]:
    """Every file under ``artifacts_dir`` except the agent log and the bundle, sorted."""
    reserved = {AGENT_LOG_FILE_NAME, RESULTS_FILE_NAME}
    return sorted(
        p.relative_to(artifacts_dir).as_posix()
        for p in artifacts_dir.rglob("*")
        if p.is_file() and p.relative_to(artifacts_dir).as_posix() not in reserved
    )
