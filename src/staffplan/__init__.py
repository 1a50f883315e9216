from .config import Config, cfg
from .domain import Day, Employee, Organization, Schedule, Shift
from .input_data import InputData
from .loader import load_input, parse_input
from .main import run_planner, run_scoring
from .scheduler import GreedyScheduler, build_schedule
from .score import ScoreResult, score_schedule
from .simulate import SimulationError, simulate
from .state import SimulationState
from .validate import validate_schedule

__all__ = [
    "Config",
    "cfg",
    "Day",
    "Employee",
    "Organization",
    "Schedule",
    "Shift",
    "InputData",
    "load_input",
    "parse_input",
    "run_planner",
    "run_scoring",
    "GreedyScheduler",
    "build_schedule",
    "ScoreResult",
    "score_schedule",
    "SimulationError",
    "simulate",
    "SimulationState",
    "validate_schedule",
]
