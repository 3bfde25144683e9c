from factorylights.search.base import (
    DEFAULT_MAX_NULLITY,
    MinWeightSearch,
    check_nullity,
)
from factorylights.search.brute_force import BruteForceSearch
from factorylights.search.gray_code import GrayCodeSearch
from factorylights.search.vectorized import VectorizedSearch
