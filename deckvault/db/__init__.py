from deckvault.db.database import drop_db, init_db
from deckvault.db.operations import (
    clear_values,
    delete_value,
    get_value,
    list_keys,
    set_value,
)

__all__ = [
    "clear_values",
    "delete_value",
    "drop_db",
    "get_value",
    "init_db",
    "list_keys",
    "set_value",
]
