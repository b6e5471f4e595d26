"""SuperSorter: instrumented sorting algorithms, a cooperative stepper and a benchmark runner."""

from .benchmark import BenchmarkOutcome, BenchmarkReport, BenchmarkResult, BenchmarkRun
from .catalog import ALGORITHMS, AlgorithmInfo, get_algorithm
from .dataset import Distribution, generate, validate_sequence
from .errors import (ConfigError, InvalidInputError, InvalidTransitionError,
                     SuperSorterError, UnknownAlgorithmError)
from .scheduling import AsyncioScheduler, CancelToken, FrameScheduler
from .session import SessionController, SortMachine, trace
from .settings import Settings, load_settings
from .steps import BucketAux, CursorAux, HeapAux, RangeAux, Step
from .stepper import Stepper, StepperState

__version__ = "1.0.0"
