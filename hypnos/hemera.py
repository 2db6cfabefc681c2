from cProfile import Profile
import sys
from typing import Any

from .internal.presets import ERRORS, FLAGS

class fault(Exception):
	"""
	Engine fault. Raised by the error handler and never caught by a
	coroutine's own recovery regions.
	"""
	def __init__(
		self,
		status: str,
		message: str
		) -> None:

		super().__init__(message)
		self.status = status

class handler:
	"""
	Error handler class.
	Stores the debug flags of a program and reports faults before raising
	them.
	"""
	def __init__(
		self,
		flags: tuple[str, ...] = ()
		) -> None:

		self.flags = flags
		self.lock = False # Locks program execution
		self.profiler = None # Profiles are created within their tasks
		self.owner = None # PID of the profiled task
		for flag in flags:
			if flag not in FLAGS:
				self.error('FLAG', flag) # Complete __init__ before potential exception

	def debug_initial(
		self,
		task
		) -> None:
		"""
		Execute pre-runtime flags.
		"""
		if 'profile' in self.flags and self.profiler is None:
			self.profiler = Profile()
			self.owner = task.pid
			self.profiler.enable()

	def debug_final(
		self,
		task,
		value: Any
		) -> Any:
		"""
		Execute post-runtime flags.
		"""
		if 'profile' in self.flags and self.owner == task.pid:
			self.profiler.disable()
			self.profiler.print_stats(sort = 'cumtime')
			self.profiler, self.owner = None, None
		if 'namespace' in self.flags:
			self.debug_namespace(task)
		return value

	def debug_processor( # Processor flags
		self,
		processor
		) -> None:

		if 'processor' in self.flags:
			self.debug_instructions(processor)

	def debug_instructions(
		self,
		routine
		) -> None:
		"""
		Prints the instructions of a routine body or module.
		"""
		print('===', file = sys.stderr)
		for i, instruction in enumerate(routine.instructions):
			print(
				i,
				instruction,
				sep = '\t',
				file = sys.stderr
			)
		print('===', file = sys.stderr)

	def debug_namespace(
		self,
		task
		) -> None:
		"""
		Prints the local namespace of a task.
		"""
		print(
			'===',
			task.name,
			'---',
			'\n---\n'.join(('{0} {1}'.format(
				name,
				value) for name, value in task.values.maps[0].items() if not (name == '0' or name.startswith('&')))
			),
			'===',
			sep = '\n',
			file = sys.stderr
		)

	def debug_supervisor(
		self,
		task,
		record
		) -> None:
		"""
		Prints the current record received by the runtime.
		"""
		print(task, record, sep = '\t', file = sys.stderr)

	def debug_task(
		self,
		task
		) -> None:
		"""
		Prints the instruction a task is about to execute.
		"""
		print(task.name, task.path, task.op, sep = '\t', file = sys.stderr)

	def timeout(
		self,
		waited: float
		) -> None:
		"""
		Prints a warning while the driver waits on a future.
		"""
		print(
			'===',
			'Future still pending after {0} seconds'.format(waited),
			'Enter Ctrl+C to interrupt program',
			'===',
			sep = '\n',
			file = sys.stderr
		)

	def error(
		self,
		status: str,
		*args: tuple
		) -> None:
		"""
		Reports an error and raises it as a fault.
		"""
		message = ERRORS[status].format(*args) if args else ERRORS[status]
		if 'suppress' not in self.flags:
			print(
				'===',
				message,
				'===',
				sep = '\n',
				file = sys.stderr
			)
		self.lock = True
		raise fault(status, message)
