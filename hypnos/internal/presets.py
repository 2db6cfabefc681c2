CONSTANTS = {
	'true': True,
	'false': False,
	'null': None
}
DATATYPES = { # Names reported by typeof
	'NoneType': 'none',
	'bool': 'boolean',
	'int': 'number',
	'float': 'number',
	'str': 'string',
	'tuple': 'list',
	'list': 'list',
	'dict': 'record',
	'routine': 'routine',
	'task': 'coroutine',
	'function': 'function',
	'builtin_function_or_method': 'function',
	'funcdef': 'function',
	'method': 'function'
}
ERRORS = {
	'BIND': 'Bind to reserved name: {0}',
	'DELG': 'Cannot delegate to {0}',
	'FIND': 'Undefined name: {0}',
	'FLAG': 'Invalid flag: {0}',
	'LOOP': 'Break or continue outside of a loop in {0}',
	'POOL': 'Future requested outside of a running pool',
	'RAIS': 'Raised value is not an exception: {0}',
	'RUNS': 'Coroutine {0} is already running',
	'SNTX': 'Syntax error: {0}'
}
FLAGS = (
	'instructions',
	'namespace',
	'processor',
	'profile',
	'supervisor',
	'suppress',
	'task',
	'timeout'
)
INTERNS = (
	'.bind',
	'.break',
	'.continue',
	'.delegate',
	'.if',
	'.iterator',
	'.loop',
	'.next',
	'.raise',
	'.return',
	'.routine',
	'.yield'
)
LABELS = (
	'START',
	'ELSE',
	'END',
	'TRY',
	'CATCH',
	'FINALLY'
)
OPENERS = ( # Labels that open a segment closed by END
	'START',
	'ELSE',
	'TRY',
	'CATCH',
	'FINALLY'
)
SOURCES = ( # Tags of delegation sources
	'coroutine',
	'generator',
	'sequence',
	'string'
)
STDLIB_NAMES = {
	# Operators
	'add': '+',
	'sub': '-',
	'mul': '*',
	'div': '/',
	'mod': '%',
	'exp': '**',
	'eql': '==',
	'neq': '!=',
	'ltn': '<',
	'gtn': '>',
	'leq': '<=',
	'geq': '>=',
	'sbs': 'in',
	'lnt': 'not',
	'lnd': 'and',
	'lor': 'or',
	# Built-ins
	'error': 'error',
	'format': 'format',
	'join': 'join',
	'length': 'length',
	'list': 'list',
	'print': 'print',
	'range': 'range',
	'string': 'string',
	'typeof': 'typeof'
}
STDLIB_PREFIX = 'std_'
"""
Regex line patterns.
"""
REGEX_EMPTY = r'(\s*(#.*)?(\n|$))*' # Matches any empty source file
REGEX_FINAL = r'(?P<final>\n)'
REGEX_LINE = r'(?P<line>[^\n]+)'
REGEX_REGISTER = r'(0|&\d+)' # Temporary and constant registers
"""
Regex token patterns.
"""
REGEX_STRING	= r'(?P<string>(\'[^\'\n]*\')|(\"[^\"\n]*\"))' # Any symbols between single or double quotes
REGEX_UNMATCHED	= r'(?P<unmatched>[\'\"])' # Quote without a partner on the same line
REGEX_COMMENT	= r'(?P<comment>#.*)'
REGEX_SEPARATOR	= r'(?P<separator>;)'
REGEX_NUMBER	= r'(?P<number>[+-]?\d+(\.\d+)?(?=[\s;#]|$))' # Any number of the format x(.y)
REGEX_WORD		= r'(?P<word>[^\s;\'\"#]+)' # Names, interns and operators
REGEX_SPACE		= r'(?P<space>\s+)'
"""
Regex combinations.
"""
REGEX_SPLIT = '|'.join((REGEX_FINAL, REGEX_LINE))
REGEX_TOKEN = '|'.join((
	REGEX_STRING,
	REGEX_UNMATCHED,
	REGEX_COMMENT,
	REGEX_SEPARATOR,
	REGEX_NUMBER,
	REGEX_WORD,
	REGEX_SPACE
))
