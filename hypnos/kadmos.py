import re

from .hemera import handler
from .internal import presets
from .internal.instructions import instruction

class parser:
	"""
	Module parser for Hypnos.
	Reads instructions from their text form, one per line:

		name address arg arg; label label

	Literal arguments are interned into constant registers.
	"""
	def __init__(
		self,
		handler: handler,
		name: str,
		offset: int = 0
		) -> None:

		self.name = name
		self.constant = offset # Constant register counter
		self.instructions = [instruction('START', label = [name])]
		self.values = {'0': None, '&0': None} # Register namespace
		self.handler = handler # Error handler

	def parse(
		self,
		source: str
		) -> tuple[list[instruction], dict]:

		if not re.fullmatch(presets.REGEX_EMPTY, source):
			for line in self.split(source):
				if (item := self.tokenise(line)):
					self.instructions.append(item)
		self.instructions.append(instruction('END'))
		if 'instructions' in self.handler.flags:
			self.handler.debug_instructions(self)
		return self.instructions, self.values

	def split(
		self,
		source: str
		) -> list[str]:
		"""
		Splits the source into lines.
		"""
		line = ''
		lines = []
		for symbol in re.finditer(presets.REGEX_SPLIT, source):
			value = symbol.group()
			match symbol.lastgroup:
				case 'final':
					lines.append(line)
					line = ''
				case 'line':
					line = value
		lines.append(line)
		return lines

	def tokenise(
		self,
		line: str
		) -> instruction | None:
		"""
		Regex tokenises a line, returning its instruction. Blank lines and
		comments have no instruction.
		"""
		head, label, tail = [], [], False
		for symbol in re.finditer(presets.REGEX_TOKEN, line):
			value = symbol.group()
			match symbol.lastgroup:
				case 'space':
					continue
				case 'comment':
					break
				case 'unmatched':
					self.handler.error('SNTX', 'unmatched quotes')
				case 'separator':
					if tail:
						self.handler.error('SNTX', line.strip())
					tail = True
					continue
			(label if tail else head).append((symbol.lastgroup, value))
		if not head:
			if tail:
				self.handler.error('SNTX', line.strip())
			return None
		kind, name = head[0]
		if kind != 'word':
			self.handler.error('SNTX', name)
		for kind, value in label:
			if kind != 'word':
				self.handler.error('SNTX', value)
		label = [value for kind, value in label]
		if name in presets.LABELS:
			if len(head) > 1:
				self.handler.error('SNTX', line.strip())
			return instruction(name, label = label)
		if name.startswith('.') and name not in presets.INTERNS:
			self.handler.error('SNTX', name)
		if len(head) < 2:
			self.handler.error('SNTX', 'missing address: ' + line.strip())
		kind, address = head[1]
		if not (kind == 'word' or address == '0'):
			self.handler.error('SNTX', address)
		args = [self.register(kind, value) for kind, value in head[2:]]
		return instruction(name, address, args, label)

	def register(
		self,
		kind: str,
		value: str
		) -> str:
		"""
		Returns the register of an argument, interning literals.
		"""
		match kind:
			case 'number':
				constant = float(value) if '.' in value else int(value)
			case 'string':
				constant = value[1:-1]
			case _:
				if value not in presets.CONSTANTS:
					return value
				constant = presets.CONSTANTS[value]
				if constant is None: # Null value is interned so that instructions can reliably take null as an operand
					return '&0'
		self.constant = self.constant + 1
		index = '&' + str(self.constant)
		self.values[index] = constant
		return index
