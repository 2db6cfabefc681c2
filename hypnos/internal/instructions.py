from dataclasses import dataclass, field

from .presets import LABELS

@dataclass(slots = True, repr = False)
class instruction:
	"""
	Instruction of a routine body.
	Interns use the prefix '.' and manage their own return addresses.
	Structural labels have no address and delimit blocks and regions.
	"""
	name: str											# Callable, intern or label.
	address: str = ''									# Register receiving the result.
	args: list[str] = field(default_factory = list)		# Argument registers.
	label: list[str] = field(default_factory = list)	# Bound names, parameters or caught error.

	def __str__(self) -> str:

		head = [self.name, self.address, *self.args] if self.address else [self.name]
		return ' '.join(head) + ';' + ''.join(' ' + name for name in self.label)

	__repr__ = __str__

	@property
	def structural(self) -> bool: return not self.address and self.name in LABELS

	@property
	def internal(self) -> bool: return self.name.startswith('.')
