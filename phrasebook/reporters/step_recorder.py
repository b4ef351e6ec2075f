"""
Step Recorder - Run record for feature executions.

Collects behave features as they finish and writes them to a
JSON run record alongside the run's metadata.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
from datetime import datetime
import json
import logging
import os

logger = logging.getLogger(__name__)

# behave statuses that do not fail a run
SUCCESS_STATUSES = ("passed", "skipped")


def _status(model) -> str:
    return model.status.name


def step_to_dict(step) -> Dict[str, Any]:
    return {
        "keyword": step.keyword,
        "text": step.name,
        "status": _status(step),
        "duration_ms": round((step.duration or 0) * 1000, 1),
        "error": step.error_message,
        "error_type": type(step.exception).__name__ if step.exception else None,
    }


def feature_to_dict(feature) -> Dict[str, Any]:
    """Flatten a finished behave Feature, with outlines expanded and background steps included."""
    return {
        "name": feature.name,
        "location": feature.filename,
        "status": _status(feature),
        "duration_seconds": round(feature.duration or 0, 3),
        "scenarios": [
            {
                "name": scenario.name,
                "status": _status(scenario),
                "steps": [step_to_dict(step) for step in scenario.all_steps],
            }
            for scenario in feature.walk_scenarios()
        ],
    }


@dataclass
class RecordEntry:
    """A single feature in the run record."""
    timestamp: datetime
    result: Dict[str, Any]
    data: Dict[str, Any] = field(default_factory=dict)


class StepRecorder:
    """
    Records feature results for one run.

    Example:
        >>> recorder = StepRecorder("./phrasebook_reports")
        >>> recorder.log_feature(feature)  # from behave's after_feature hook
        >>> record_path = recorder.write()
    """

    def __init__(
        self,
        output_dir: str = "./phrasebook_reports",
        run_name: Optional[str] = None,
    ):
        """
        Initialize the recorder.

        Args:
            output_dir: Directory for run records
            run_name: Optional name for this run
        """
        self.output_dir = output_dir
        self.run_name = run_name or datetime.now().strftime("%Y%m%d_%H%M%S")
        self.entries: List[RecordEntry] = []
        self.metadata: Dict[str, Any] = {
            "start_time": datetime.now().isoformat(),
            "run_name": self.run_name,
        }
        self.run_dir = os.path.join(output_dir, self.run_name)

    def log_feature(self, feature) -> None:
        result = feature_to_dict(feature)
        self.entries.append(RecordEntry(
            timestamp=datetime.now(),
            result=result,
            data={"success": result["status"] in SUCCESS_STATUSES},
        ))

    @property
    def passed(self) -> int:
        return len([e for e in self.entries if e.data.get("success")])

    @property
    def failed(self) -> int:
        return len(self.entries) - self.passed

    def write(self) -> str:
        """
        Write the run record.

        Returns:
            Path to run_record.json
        """
        self.metadata["end_time"] = datetime.now().isoformat()
        self.metadata["features_passed"] = self.passed
        self.metadata["features_failed"] = self.failed

        os.makedirs(self.run_dir, exist_ok=True)
        record_path = os.path.join(self.run_dir, "run_record.json")
        with open(record_path, "w", encoding="utf-8") as f:
            json.dump({
                "metadata": self.metadata,
                "features": [
                    {"timestamp": e.timestamp.isoformat(), **e.result}
                    for e in self.entries
                ],
            }, f, indent=2)

        logger.info(f"[StepRecorder] Run record written to {record_path}")
        return record_path
