import importlib

from salesdash.models.transaction import Transaction


def import_all_models() -> None:
    for module_name in ("salesdash.models.transaction",):
        importlib.import_module(module_name)


__all__ = ["Transaction", "import_all_models"]
