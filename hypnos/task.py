from collections import ChainMap
from typing import Any

from . import metis
from .datatypes import aletheia, iris
from .hemera import fault
from .internal.presets import OPENERS, STDLIB_NAMES
from .stdlib import arche

class task(aletheia.coroutine):
	"""
	Base task object for Hypnos.
	A task is one invocation of a routine. It executes the routine body as a
	state machine that pauses at suspension instructions and resumes when its
	driver calls advance(), inject_exception() or force_return().
	The paused position is the instruction index plus the local namespace.
	"""
	def __init__(
		self,
		routine: aletheia.routine,
		args: tuple
		) -> None:
		"""
		Task identifiers.
		"""
		self.name = routine.name
		self.pid = id(self)
		"""
		Namespace management.
		"""
		params = {name: None for name in routine.params} | dict(zip(routine.params, args))
		self.values = ChainMap(params, *routine.closure.maps) # Locals first, then the closure by reference
		"""
		Instruction execution data.
		"""
		self.instructions = routine.instructions # Guaranteed to start with START and end with END
		self.table = routine.table
		self.op = self.instructions[0] # Current instruction
		self.path = 1 # Instruction index
		"""
		Coroutine state management.
		"""
		self.state = 'suspended_start'
		self.offer = None # Value offered at the active suspension point
		self.result = None # Final result, until it is reported
		self.delegate = None # Source receiving forwarded resume commands
		self.completions = [] # Completions pending on finalisation regions
		self.handler = routine.handler # Error handler

	def __str__(self) -> str: return '{0}:{1}'.format(self.name, self.pid)

	__repr__ = __str__

	"""
	Driver operations.
	"""

	def advance(
		self,
		value: Any = None
		) -> aletheia.record:
		"""
		Resumes the task. The value becomes the result of the active suspension
		point and is ignored on the first call.
		"""
		match self.state:
			case 'completed':
				return aletheia.record(None, True)
			case 'running':
				self.handler.error('RUNS', self.name)
			case 'suspended_start':
				self.handler.debug_initial(self)
			case 'suspended_yield':
				if self.delegate:
					return self.relay('advance', value)
				self.values[self.op.address] = value
		self.state = 'running'
		return self.run()

	def inject_exception(
		self,
		error: BaseException
		) -> aletheia.record:
		"""
		Resumes the task by raising an error at the active suspension point.
		"""
		match self.state:
			case 'completed':
				raise error
			case 'running':
				self.handler.error('RUNS', self.name)
			case 'suspended_start':
				self.finish()
				raise error
			case 'suspended_yield':
				if self.delegate:
					return self.relay('inject_exception', error)
		self.state = 'running'
		self.unwind('raise', error)
		return self.run()

	def force_return(
		self,
		value: Any = None
		) -> aletheia.record:
		"""
		Terminates the task at the active suspension point. Finalisation
		regions still run and may suspend again or override the result.
		"""
		match self.state:
			case 'completed':
				return aletheia.record(value, True)
			case 'running':
				self.handler.error('RUNS', self.name)
			case 'suspended_start':
				self.finish()
				return aletheia.record(value, True)
			case 'suspended_yield':
				if self.delegate:
					return self.relay('force_return', value)
		self.state = 'running'
		self.unwind('return', value)
		return self.run()

	"""
	Runtime.
	"""

	def run(self) -> aletheia.record:
		"""
		Task runtime loop.
		Performs dispatch and executes instructions until the task suspends or
		completes.
		"""
		debug_task = 'task' in self.handler.flags # Debug runtime loop
		while self.path:
			self.op = self.instructions[self.path]
			if debug_task:
				self.handler.debug_task(self)
			self.path = self.path + 1
			try:
				if not self.op.structural:
					self.execute()
				elif self.op.name in task.labels:
					task.labels[self.op.name](self)
			except fault:
				if self.state != 'completed':
					self.finish()
				raise
			except Exception as error:
				if self.state == 'completed': # Already unwound without a handler
					raise
				self.unwind('raise', error)
			if self.state == 'suspended_yield':
				return aletheia.record(self.offer, False)
		if self.state != 'completed':
			self.complete(None)
		value, self.result = self.result, None
		return aletheia.record(value, True)

	def execute(self) -> None:
		"""
		Executes an instruction. Interns manage their own return addresses.
		"""
		try:
			args = [self.values[arg] for arg in self.op.args]
		except KeyError as e:
			self.handler.error('FIND', e.args[0])
		if self.op.internal:
			task.interns[self.op.name](self, *args)
		else:
			try:
				routine = self.values[self.op.name]
			except KeyError:
				self.handler.error('FIND', self.op.name)
			self.values[self.op.address] = routine(*args)

	def relay(
		self,
		command: str,
		value: Any
		) -> aletheia.record:
		"""
		Forwards a driver command to the delegation source.
		"""
		self.state = 'running'
		try:
			record = getattr(self.delegate, command)(value)
		except fault:
			self.finish()
			raise
		except Exception as error:
			self.unwind('raise', error)
			return self.run()
		if not record.completed:
			self.state = 'suspended_yield'
			self.offer = record.value
			return record
		self.delegate = None
		if command == 'force_return':
			self.unwind('return', record.value)
		else:
			self.values[self.op.address] = record.value
		return self.run()

	def unwind(
		self,
		kind: str,
		value: Any
		) -> None:
		"""
		Unwinds an abrupt completion from the current instruction to the
		innermost region that handles it. Raises the error or completes the
		task if no region does.
		Jumps from break and continue run the finalisation regions they leave
		and then move to their target.
		"""
		self.delegate = None
		path = self.path - 1
		for item in self.table.enclosing(path):
			if kind == 'jump' and item.start < value <= item.end: # Target is inside this region
				break
			if item.finalises(path): # Abandon the pending completion of this region
				if self.completions and self.completions[-1][0] is item:
					self.completions.pop()
			elif kind == 'raise' and item.catch is not None and item.protects(path):
				if item.name:
					self.values[item.name] = value
				self.path = item.catch + 1
				return
			elif item.final is not None:
				self.completions.append((item, (kind, value)))
				self.path = item.final + 1
				return
		if kind == 'jump':
			self.path = value
		elif kind == 'raise':
			self.finish()
			raise value
		else:
			self.complete(value)

	def complete(
		self,
		value: Any
		) -> None:

		self.path = 0
		self.state = 'completed'
		self.result = value
		self.completions = []
		self.handler.debug_final(self, value)

	def finish(self) -> None:
		"""
		Completes the task without a result.
		"""
		self.path = 0
		self.state = 'completed'
		self.result = None
		self.delegate = None
		self.completions = []
		self.handler.debug_final(self, None)

	def branch(
		self,
		scope: int = 0,
		skip: bool = False,
		move: bool = False
		) -> int:
		"""
		Universal branch function.
		"""
		path = self.path
		while True:
			op, path = self.instructions[path], path + 1
			if op.structural:
				if op.name in OPENERS:
					scope = scope + 1
				elif op.name == 'END':
					scope = scope - 1
				if scope == 0 and (skip or self.instructions[path].name != 'ELSE'):
					if move:
						self.path = path
					return path

	def opener(
		self,
		path: int
		) -> int:
		"""
		Returns the index of the label that opens the segment containing the
		instruction before the path.
		"""
		scope = 1
		while True:
			path = path - 1
			if (op := self.instructions[path]).structural:
				if op.name in OPENERS:
					scope = scope - 1
				elif op.name == 'END':
					scope = scope + 1
				if scope == 0:
					return path

	def loop(self) -> tuple[int, int]:
		"""
		Finds the innermost enclosing block that ends in a loop. Returns the
		index of its opening label and the index after its END.
		"""
		path, start = self.path, self.path
		while True:
			start = self.opener(start)
			self.path = start + 1
			end = self.branch(1, True)
			if self.instructions[end - 2].name == '.loop':
				self.path = path
				return start, end
			if start == 0:
				self.handler.error('LOOP', self.name)

	def assign(
		self,
		name: str,
		value: Any
		) -> None:
		"""
		Assigns to the innermost namespace that binds the name.
		"""
		if name in STDLIB_NAMES.values():
			self.handler.error('BIND', name)
		for namespace in self.values.maps:
			if name in namespace:
				namespace[name] = value
				return
		self.values[name] = value

	def use(self) -> dict:
		"""
		Executes the routine definitions of a module and returns them.
		"""
		self.path = 1
		while 0 < self.path < len(self.instructions):
			self.op = self.instructions[self.path]
			self.path = self.path + 1
			if self.op.name == '.routine':
				self.intern_routine()
		self.path = 1
		return arche.user_namespace(self.values.maps[0])

	"""
	Labels.
	"""

	def label_finally(self) -> None:
		"""
		Reached when a body or catch segment completes normally.
		"""
		self.completions.append((self.table.ends[self.path - 2], None))

	def label_end(self) -> None:

		index = self.path - 1
		if index == len(self.instructions) - 1: # End of routine
			self.complete(None)
			return
		if (item := self.table.ends.get(index)) is None:
			return
		if item.final is not None and index == item.end: # End of finalisation
			completion = self.completions.pop()[1]
			if completion:
				self.unwind(*completion)
		elif item.final is not None:
			self.path = item.final
		elif index == item.body: # Skip the catch segment
			self.path = item.end + 1

	labels = {
		'END': label_end,
		'FINALLY': label_finally
	}

	"""
	Internal instructions.
	"""

	def intern_bind(
		self,
		*args: tuple
		) -> None:

		for i, name in enumerate(self.op.label):
			self.assign(name, args[i])

	def intern_break(self) -> None:

		self.unwind('jump', self.loop()[1])

	def intern_continue(self) -> None:

		self.unwind('jump', self.loop()[0] or 1) # Index 0 opens the routine body

	def intern_delegate(
		self,
		value: Any
		) -> None:

		if (source := iris.source.read(value)) is None:
			self.handler.error('DELG', type(value).__name__)
		self.delegate = source
		record = source.advance()
		if record.completed:
			self.delegate = None
			self.values[self.op.address] = record.value
		else:
			self.state = 'suspended_yield'
			self.offer = record.value

	def intern_if(
		self,
		*condition: tuple
		) -> None:

		if not condition: # Unconditional branch
			self.branch(1, False, True)
		elif not condition[0]:
			self.branch(1, True, True)

	def intern_iterator(
		self,
		sequence: Any
		) -> None:

		self.values[self.op.address] = iter(sequence)

	def intern_loop(self) -> None:

		self.path = self.opener(self.path) or 1

	def intern_next(
		self,
		iterator: Any
		) -> None:

		try:
			self.values[self.op.address] = next(iterator)
		except StopIteration:
			self.branch(1, False, True)

	def intern_raise(
		self,
		error: Any
		) -> None:

		if not isinstance(error, BaseException):
			self.handler.error('RAIS', error)
		raise error

	def intern_return(
		self,
		*value: tuple
		) -> None:

		self.unwind('return', value[0] if value else None)

	def intern_routine(self) -> None:
		"""
		Defines a routine from the following block. The routine closes over
		the current namespace.
		"""
		name, params = self.op.address, list(self.op.label)
		start, end = self.path, self.branch(0, True, True)
		instructions = self.instructions[start:end]
		table = metis.processor(self.handler, instructions).analyse()
		if name in STDLIB_NAMES.values():
			self.handler.error('BIND', name)
		self.values[name] = aletheia.routine(name, params, instructions, table, self.values, self.handler)

	def intern_yield(
		self,
		value: Any
		) -> None:

		self.state = 'suspended_yield'
		self.offer = value

	interns = {
		'.bind': intern_bind,
		'.break': intern_break,
		'.continue': intern_continue,
		'.delegate': intern_delegate,
		'.if': intern_if,
		'.iterator': intern_iterator,
		'.loop': intern_loop,
		'.next': intern_next,
		'.raise': intern_raise,
		'.return': intern_return,
		'.routine': intern_routine,
		'.yield': intern_yield
	}
