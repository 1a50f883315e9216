from dataclasses import dataclass
from pathlib import Path

from staffplan.strategies.registry import DEFAULT_STRATEGY, STRATEGY_REGISTRY


@dataclass
class Config:

    ### SCHEDULER ###

    # Candidate ranking used by the greedy scheduler (see strategies.registry)
    STRATEGY: str = DEFAULT_STRATEGY

    ### OUTPUT ###

    # Merge contiguous same-employee same-skill shifts into one output token
    MERGE_OUTPUT_SHIFTS: bool = True

    # Where CSVs, plots and the PDF report are written
    OUTPUT_DIR: Path = Path("outputs")
    EXPORT_CSV: bool = True

    ### REPORTING ###

    ENABLE_REPORTING: bool = True
    ENABLE_PLOTS: bool = True
    ENABLE_PRECHECK: bool = True

    # Rows shown in the per-employee / per-day tables of the text report
    NUM_PRINT_EXAMPLES: int = 6

    # Max employees drawn on the sample Gantt chart
    GANTT_MAX_EMPLOYEES: int = 10

    # RANDOM SEED (Gantt sampling only; scheduling is deterministic)
    SEED: int = 42

    def __post_init__(self) -> None:
        self.OUTPUT_DIR = Path(self.OUTPUT_DIR)

    def validate(self):
        """
        Validate the Config object has sensible values before running.
        """
        if self.STRATEGY not in STRATEGY_REGISTRY:
            raise ValueError(
                f"STRATEGY must be one of {sorted(STRATEGY_REGISTRY)}; "
                f"got '{self.STRATEGY}'."
            )
        if self.NUM_PRINT_EXAMPLES <= 0:
            raise ValueError("NUM_PRINT_EXAMPLES must be > 0.")
        if self.GANTT_MAX_EMPLOYEES <= 0:
            raise ValueError("GANTT_MAX_EMPLOYEES must be > 0.")


cfg = Config()
