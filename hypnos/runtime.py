# ☉ 0.1 18-10-2026

import multiprocessing as mp
from collections import ChainMap
from multiprocessing.pool import AsyncResult, ThreadPool
from typing import Any, Callable

from . import hemera, kadmos, metis
from .datatypes import aletheia
from .stdlib import arche
from .task import task

class runtime:
	"""
	Base runtime environment for Hypnos.
	The runtime loads a module of routines and acts as the driver of the
	coroutines they produce. Futures offered by a coroutine are resolved in a
	worker pool and their results are sent back into the coroutine; the engine
	itself never waits on anything.
	"""
	def __init__(
		self,
		source: str,
		*flags: tuple[str, ...],
		namespace: dict | None = None,
		name: str = 'main'
		) -> None:

		self.namespace = {}
		self.pool = None # Don't initialise just yet
		self.error = None # Fault that locked the runtime
		try: # Yes, the handler can fault if it's given unknown flags
			self.handler = hemera.handler(flags)
		except hemera.fault as e:
			self.error = e
			self.handler = hemera.handler()
			self.handler.lock = True
			return
		"""
		Compile stage. Binds the routines defined by the module.
		"""
		try:
			instructions, values = kadmos.parser(self.handler, name).parse(source)
			table = metis.processor(self.handler, instructions).analyse()
			closure = ChainMap(
				values,
				namespace if namespace is not None else {}, # Host bindings are shared, not copied
				{'future': self.future},
				arche.stdvalues
			)
			module = aletheia.routine(name, [], instructions, table, closure, self.handler)
			self.namespace = task(module, ()).use()
		except hemera.fault as e: # Catches any compile-time error
			self.error = e
			self.handler.lock = True # Lock runtime

	def future(
		self,
		routine: Callable,
		*args: tuple
		) -> AsyncResult:
		"""
		Schedules a call in the worker pool.
		"""
		if self.pool is None:
			self.handler.error('POOL')
		return self.pool.apply_async(routine, args)

	def resolve(
		self,
		future: AsyncResult
		) -> Any:
		"""
		Waits for a future, warning at every interval.
		"""
		interval = 10 if 'timeout' in self.handler.flags else None # Timeout interval
		waited = 0
		while True:
			try:
				return future.get(interval)
			except mp.TimeoutError:
				waited = waited + interval
				self.handler.timeout(waited)

	def drive(
		self,
		coroutine: aletheia.coroutine
		) -> Any:
		"""
		Drives a coroutine to completion and returns its result.
		"""
		record = coroutine.advance()
		while not record.completed:
			if 'supervisor' in self.handler.flags:
				self.handler.debug_supervisor(coroutine, record)
			value = record.value
			try:
				if isinstance(value, AsyncResult):
					value = self.resolve(value)
				elif isinstance(value, aletheia.coroutine):
					value = self.drive(value)
			except hemera.fault:
				raise
			except Exception as error: # Failures are sent back to the coroutine
				record = coroutine.inject_exception(error)
				continue
			record = coroutine.advance(value)
		if 'supervisor' in self.handler.flags:
			self.handler.debug_supervisor(coroutine, record)
		return record.value

	def run(
		self,
		entry: str = 'main',
		*args: tuple
		) -> Any:
		"""
		Default runtime environment. Drives the entry routine with a pool open.
		"""
		if self.handler.lock:
			return None
		if entry not in self.namespace:
			self.handler.error('FIND', entry)
		self.pool = ThreadPool()
		try:
			return self.drive(self.namespace[entry](*args))
		except hemera.fault:
			self.handler.lock = True
			raise
		finally:
			self.pool.close()
			self.pool.join()
			self.pool = None

def load(
	source: str,
	namespace: dict | None = None,
	*flags: tuple[str, ...],
	name: str = 'module'
	) -> dict:
	"""
	Returns the routines defined by a module. Raises the fault that stopped
	it from compiling, if any.
	"""
	instance = runtime(source, *flags, namespace = namespace, name = name)
	if instance.error is not None:
		raise instance.error
	return instance.namespace
