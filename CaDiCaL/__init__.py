__all__ = ['Solver', 'Status', 'Timeout', 'Registration',
           'CADICAL_RESULT_UNKNOWN', 'CADICAL_RESULT_SAT', 'CADICAL_RESULT_UNSAT',
           'CCaDiCaL', 'CCaDiCaL_P', 'LitID', 'LitID_P', 'LIT_MAX', 'LIT_MIN',
           'status2str', 'validate_literal', 'validate_clause',
           'CaDiCaLError', 'InvalidLiteral', 'InvalidQuery', 'UnknownOption',
           'CallbackFailed', 'EngineFailure', 'DimacsError',
           'find_library', 'load_library', 'load_config']

from CaDiCaL.CDCL import *
from CaDiCaL.basic_types import *
from CaDiCaL.callbacks import Timeout, Registration
from CaDiCaL.config import load_config
from CaDiCaL.errors import *
from CaDiCaL.library import find_library, load_library
