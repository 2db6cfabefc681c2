from dataclasses import dataclass

from .hemera import handler
from .internal.instructions import instruction

@dataclass(slots = True, repr = False)
class region:
	"""
	Recovery and finalisation region of a routine body.
	Indices are the positions of the labels that delimit each segment.
	"""
	start: int						# TRY label.
	body: int = 0					# END of the protected body.
	catch: int | None = None		# CATCH label.
	rescue: int | None = None		# END of the catch segment.
	final: int | None = None		# FINALLY label.
	end: int = 0					# END of the last segment.
	name: str = ''					# Name bound to a caught error.

	def __contains__(self, path: int) -> bool: return self.start < path < self.end

	def __str__(self) -> str:

		return 'region {0} {1} {2} {3}'.format(
			self.start,
			self.catch if self.catch is not None else '-',
			self.final if self.final is not None else '-',
			self.end
		)

	__repr__ = __str__

	def protects(self, path: int) -> bool: return self.start < path < self.body

	def finalises(self, path: int) -> bool: return self.final is not None and self.final < path < self.end

class table:
	"""
	Region table of a routine body, innermost region first.
	"""
	def __init__(self) -> None:

		self.regions = []
		self.ends = {} # END labels of regions by index

	def enclosing(
		self,
		path: int
		) -> list[region]:

		return [item for item in self.regions if path in item]

class processor:
	"""
	Static analysis processor for routine bodies.
	Checks that blocks are balanced and builds the region table that the task
	uses to unwind exceptions and returns.
	"""
	def __init__(
		self,
		handler: handler,
		instructions: list[instruction]
		) -> None:

		self.name = instructions[0].label[0] if instructions and instructions[0].label else ''
		self.handler = handler
		self.instructions = instructions
		self.table = table()
		self.path = 0
		self.op = None

	def analyse(self) -> table:

		self.handler.debug_processor(self)
		stack, closed = [], None
		for self.path, self.op in enumerate(self.instructions):
			if not self.op.structural: # Skip instructions
				continue
			match self.op.name:
				case 'START' | 'ELSE':
					stack.append(None)
				case 'TRY':
					item = region(self.path)
					self.table.regions.append(item)
					stack.append(item)
				case 'CATCH':
					item = self.resume(closed)
					if item.catch is not None or item.final is not None:
						self.handler.error('SNTX', 'misplaced CATCH')
					item.catch = self.path
					item.name = self.op.label[0] if self.op.label else ''
					stack.append(item)
				case 'FINALLY':
					item = self.resume(closed)
					if item.final is not None:
						self.handler.error('SNTX', 'misplaced FINALLY')
					item.final = self.path
					stack.append(item)
				case 'END':
					if not stack:
						self.handler.error('SNTX', 'unmatched END')
					item = stack.pop()
					if item:
						if item.catch is None and item.final is None:
							item.body = self.path
						elif item.final is None: # Catch segment
							item.rescue = self.path
						item.end = self.path
						self.table.ends[self.path] = item
					closed = item
		if stack:
			self.handler.error('SNTX', 'unterminated block')
		for item in self.table.regions:
			if item.catch is None and item.final is None:
				self.handler.error('SNTX', 'TRY without CATCH or FINALLY')
		self.table.regions.sort(key = lambda item: item.start, reverse = True) # Innermost first
		return self.table

	def resume(
		self,
		closed: region | None
		) -> region:
		"""
		Returns the region whose segment ends directly before the current label.
		"""
		if closed is None or closed.end != self.path - 1:
			self.handler.error('SNTX', 'misplaced ' + self.op.name)
		return closed
