from collections.abc import Iterable
from types import GeneratorType
from typing import Any

from .aletheia import coroutine, record
from ..internal.presets import SOURCES

class source:
	"""
	Delegation source. Adapts anything a coroutine delegates to into the
	driver protocol, so that resume commands can be forwarded to it.
	The kind of the source is tagged once, on creation.
	"""
	def __init__(
		self,
		kind: str,
		value: Any
		) -> None:

		if kind not in SOURCES:
			raise ValueError('Unknown source kind: {0}'.format(kind))
		self.kind = kind
		self.value = value
		match kind:
			case 'coroutine' | 'generator':
				self.iterator = value
			case 'sequence' | 'string':
				self.iterator = iter(value)
		self.started = False # Generators take no value on their first step

	def __str__(self) -> str: return '{0} {1}'.format(self.kind, type(self.value).__name__)

	__repr__ = __str__

	@classmethod
	def read(
		cls,
		value: Any
		) -> 'source | None':
		"""
		Tags a value with its kind of source. Returns None if the value
		cannot be delegated to.
		"""
		if isinstance(value, coroutine):
			return cls('coroutine', value)
		elif isinstance(value, GeneratorType):
			return cls('generator', value)
		elif isinstance(value, str):
			return cls('string', value)
		elif isinstance(value, Iterable):
			return cls('sequence', value)
		return None

	def advance(
		self,
		value: Any = None
		) -> record:

		match self.kind:
			case 'coroutine':
				return self.iterator.advance(value)
			case 'generator':
				try:
					offer = self.iterator.send(value if self.started else None)
				except StopIteration as e:
					return record(e.value, True)
				finally:
					self.started = True
				return record(offer, False)
			case 'sequence' | 'string':
				try:
					return record(next(self.iterator), False)
				except StopIteration:
					return record(None, True)

	def inject_exception(
		self,
		error: BaseException
		) -> record:

		match self.kind:
			case 'coroutine':
				return self.iterator.inject_exception(error)
			case 'generator':
				try:
					offer = self.iterator.throw(error)
				except StopIteration as e:
					return record(e.value, True)
				return record(offer, False)
			case 'sequence' | 'string':
				self.iterator = iter(()) # Sequences have no recovery
				raise error

	def force_return(
		self,
		value: Any = None
		) -> record:

		match self.kind:
			case 'coroutine':
				return self.iterator.force_return(value)
			case 'generator':
				self.iterator.close()
				return record(value, True)
			case 'sequence' | 'string':
				self.iterator = iter(())
				return record(value, True)
