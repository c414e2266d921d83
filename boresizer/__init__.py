from .model import (
    BoreInputError,
    BoreResult,
    Cable,
    Circle,
    DiameterExceededError,
    EmptyCircleSetError,
    NoCablesError,
    PackingResult,
    Point,
    TableRow,
    TooManyCablesError,
)
from .config import PackingConfig, get_packing_config, set_packing_config
from .math_utils import almost_equal, distance, polar_to_cartesian
from .circles import assign_colors_to_circles, generate_random_color, map_rows_to_circles
from .packing import (
    calculate_minimum_enclose_for_circles,
    check_enclose,
    circle_position_is_valid,
    create_enclose,
    find_optimal_enclose_size,
    place_circle,
    sort_circles,
)
from .bore import generate_bore, generate_bore_response, generate_result_id
from .printer import circle_to_dict, format_result, result_to_dict, rows_from_json

__all__ = [
    'BoreInputError',
    'BoreResult',
    'Cable',
    'Circle',
    'DiameterExceededError',
    'EmptyCircleSetError',
    'NoCablesError',
    'PackingResult',
    'Point',
    'TableRow',
    'TooManyCablesError',
    'PackingConfig',
    'get_packing_config',
    'set_packing_config',
    'almost_equal',
    'distance',
    'polar_to_cartesian',
    'assign_colors_to_circles',
    'generate_random_color',
    'map_rows_to_circles',
    'calculate_minimum_enclose_for_circles',
    'check_enclose',
    'circle_position_is_valid',
    'create_enclose',
    'find_optimal_enclose_size',
    'place_circle',
    'sort_circles',
    'generate_bore',
    'generate_bore_response',
    'generate_result_id',
    'circle_to_dict',
    'format_result',
    'result_to_dict',
    'rows_from_json',
]
