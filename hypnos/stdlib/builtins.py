'''
Built-in functions.
'''

from ..datatypes.aletheia import funcdef
from ..internal.presets import DATATYPES

def error_string(message):

	return Exception(message)

std_error = funcdef(
	error_string
)

def format_string(string, *args):

	return string.format(*args)

std_format = format_string

def join_list_string(sequence, joiner):

	return joiner.join(str(item) for item in sequence)

std_join = funcdef(
	join_list_string
)

def length_sequence(sequence): return len(sequence)

std_length = funcdef(
	length_sequence
)

def list_any(*args): return args

std_list = list_any

def print_any(*args):

	print(*args)
	return args[0] if len(args) == 1 else None

std_print = print_any

def range_integer(y): return tuple(range(y))

def range_integer_integer(x, y): return tuple(range(x, y))

def range_integer_integer_integer(x, y, z): return tuple(range(x, y, z))

std_range = funcdef(
	range_integer,
	range_integer_integer,
	range_integer_integer_integer
)

def string_any(value):

	if value is None:
		return 'null'
	elif isinstance(value, bool):
		return 'true' if value else 'false'
	return str(value)

std_string = funcdef(
	string_any
)

def typeof_any(value):
	"""
	Names the type of a value.
	"""
	if isinstance(value, BaseException):
		return 'error'
	return DATATYPES.get(type(value).__name__, 'object')

std_typeof = funcdef(
	typeof_any
)
