'''
Namespace composition and internals.
'''

import re

from . import builtins, operators
from ..internal.presets import REGEX_REGISTER, STDLIB_NAMES, STDLIB_PREFIX

def user_namespace(
	namespace: dict[str]
	) -> dict[str]:

	return {k: v for k, v in namespace.items() if not (k in STDLIB_NAMES.values() or re.fullmatch(REGEX_REGISTER, k))}

namespace = operators.__dict__ | builtins.__dict__
stdvalues = {STDLIB_NAMES[k[len(STDLIB_PREFIX):]]: v for k, v in namespace.items() if k.startswith(STDLIB_PREFIX)}
