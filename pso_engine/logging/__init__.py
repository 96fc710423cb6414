from pso_engine.logging.run_logger import ITERATION_FIELDS, RunLogger

__all__ = ["RunLogger", "ITERATION_FIELDS"]
