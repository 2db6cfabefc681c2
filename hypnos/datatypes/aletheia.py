'''
Data model of the coroutine engine.
'''

from collections import ChainMap
from dataclasses import dataclass
from typing import Any, Callable, Iterator

@dataclass(slots = True, repr = False)
class record:
	"""
	Suspension record. Every driver call on a coroutine produces one.
	An incomplete record holds the value offered at a suspension point;
	a completed record holds the final result, or null.
	"""
	value: Any = None
	completed: bool = False

	def __iter__(self) -> Iterator: return iter((self.value, self.completed))

	def __str__(self) -> str: return '{{value: {0}, completed: {1}}}'.format(repr(self.value), str(self.completed).lower())

	__repr__ = __str__

class coroutine:
	"""
	Base coroutine object.
	Defines the driver protocol shared by every resumable unit of execution.
	Coroutines are also host iterators.
	"""
	def advance(
		self,
		value: Any = None
		) -> record:

		raise NotImplementedError

	def inject_exception(
		self,
		error: BaseException
		) -> record:

		raise NotImplementedError

	def force_return(
		self,
		value: Any = None
		) -> record:

		raise NotImplementedError

	def __iter__(self) -> Iterator: return self

	def __next__(self) -> Any:

		value, completed = self.advance()
		if completed:
			raise StopIteration(value)
		return value

class routine:
	"""
	Coroutine-producing definition.
	Every call creates a new task that starts suspended before the first
	instruction of the body.
	"""
	def __init__(
		self,
		name: str,
		params: list[str],
		instructions: list,
		table,
		closure: ChainMap,
		handler
		) -> None:

		self.name = name
		self.params = params
		self.instructions = instructions # Body, delimited by START and END
		self.table = table # Region table from static analysis
		self.closure = closure # Defining namespace, shared by reference
		self.handler = handler

	def __call__(
		self,
		*args: tuple
		) -> coroutine:

		from ..task import task # Tasks import this module
		return task(self, args)

	def __str__(self) -> str: return 'routine ' + self.name

	__repr__ = __str__

class funcdef:
	"""
	Built-in function.
	Dispatches on the number of arguments given to it.
	"""
	def __init__(
		self,
		*methods: Callable
		) -> None:

		self.name = methods[0].__name__
		self.methods = {method.__code__.co_argcount: method for method in methods}

	def __call__(
		self,
		*args: tuple
		) -> Any:

		try:
			method = self.methods[len(args)]
		except KeyError:
			raise TypeError('{0} takes no {1} arguments'.format(self.name, len(args))) from None
		return method(*args)

	def __str__(self) -> str: return self.name

	__repr__ = __str__
