from ._flat_format import to_flat_format
from ._logging import configure_logging, generate_log_check_id
from ._matching import Assignments, build_graph, find_augmenting_path, find_best_matching

try:
    from tomllib import TOMLDecodeError
    from tomllib import loads as toml_loads
except ModuleNotFoundError:
    from tomli import TOMLDecodeError
    from tomli import loads as toml_loads
