'''
Built-in operators.
'''

from ..datatypes.aletheia import funcdef

def u_add(x): return +x

def b_add(x, y): return x + y

std_add = funcdef(
	u_add,
	b_add
)

def u_sub(x): return -x

def b_sub(x, y): return x - y

std_sub = funcdef(
	u_sub,
	b_sub
)

def b_mul(x, y): return x * y

std_mul = funcdef(
	b_mul
)

def b_div(x, y): return x / y

std_div = funcdef(
	b_div
)

def b_mod(x, y): return x % y

std_mod = funcdef(
	b_mod
)

def b_exp(x, y): return x ** y

std_exp = funcdef(
	b_exp
)

def b_eql(x, y): return x == y

std_eql = funcdef(
	b_eql
)

def b_neq(x, y): return x != y

std_neq = funcdef(
	b_neq
)

def b_ltn(x, y): return x < y

std_ltn = funcdef(
	b_ltn
)

def b_gtn(x, y): return x > y

std_gtn = funcdef(
	b_gtn
)

def b_leq(x, y): return x <= y

std_leq = funcdef(
	b_leq
)

def b_geq(x, y): return x >= y

std_geq = funcdef(
	b_geq
)

def b_sbs(x, y): return x in y

std_sbs = funcdef(
	b_sbs
)

def u_lnt(x): return not x

std_lnt = funcdef(
	u_lnt
)

def b_lnd(x, y): return x and y

std_lnd = funcdef(
	b_lnd
)

def b_lor(x, y): return x or y

std_lor = funcdef(
	b_lor
)
