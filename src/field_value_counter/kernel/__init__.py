from .composition_root import AppRuntime, build_runtime
from .runner import MessageHandler, Runner, RunStats

__all__ = ["AppRuntime", "MessageHandler", "RunStats", "Runner", "build_runtime"]
