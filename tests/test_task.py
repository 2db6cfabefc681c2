import pytest

from hypnos.datatypes.aletheia import record
from hypnos.hemera import fault

COUNTER = '''
.routine counter
START
	.bind 0 0; i
	START
		.yield 0 i
		+ i i 1
		.loop 0
	END
END
'''

SEQUENCE = '''
.routine sequence
START
	.yield 0 1
	.yield 0 2
	.yield 0 3
END
'''

EARLY_RETURN = '''
.routine early
START
	.yield 0 1
	.return 0 2
	.yield 0 3
END
'''

ACCUMULATOR = '''
.routine accumulator
START
	.bind 0 0 1; i step
	START
		+ i i step
		.yield n i
		typeof kind n
		== number kind 'number'
		START
			.if 0 number
			.bind 0 n; step
		END
		.loop 0
	END
END
'''

CONCATENATE = '''
.routine concatenate
START
	.bind 0 'foo'; text
	.yield a text
	+ text text a
	.yield b text
	+ text text b
	.yield c text
	+ out text c
	.yield 0 out
END
'''

FIRST_VALUE = '''
.routine first
START
	.yield x 1
	.yield 0 x
END
'''

RECOVERY = '''
.routine recovery
START
	TRY
		.yield 0 1
		.yield 0 2
	END
	CATCH; e
		.yield 0 e
	END
	.yield 0 3
END
'''

HOST_ERROR = '''
.routine divide; x y
START
	TRY
		/ q x y
	END
	CATCH; e
		typeof kind e
		.return 0 kind
	END
	.return 0 q
END
'''

CLEANUP = '''
.routine cleanup
START
	TRY
		.yield 0 1
		.yield 0 2
	END
	FINALLY
		tidy 0
	END
	.return 0 'done'
END
'''

CLEANUP_YIELDS = '''
.routine cleanup
START
	TRY
		.yield 0 1
	END
	FINALLY
		.yield 0 'cleanup'
	END
END
'''

CLEANUP_OVERRIDES = '''
.routine cleanup
START
	TRY
		.yield 0 1
	END
	FINALLY
		.return 0 'override'
	END
END
'''

RAISE = '''
.routine failing
START
	error e 'oops'
	.raise 0 e
END
.routine invalid
START
	.raise 0 5
END
'''

REENTER = '''
.routine reenter
START
	again 0
END
'''

def test_counter_is_unbounded(module):

	counter = module(COUNTER)['counter']()
	assert [next(counter) for _ in range(6)] == [0, 1, 2, 3, 4, 5]
	assert counter.advance() == record(6, False)

def test_sequence_then_idempotent_completion(module):

	sequence = module(SEQUENCE)['sequence']()
	assert [tuple(sequence.advance()) for _ in range(5)] == [
		(1, False),
		(2, False),
		(3, False),
		(None, True),
		(None, True)
	]
	assert sequence.state == 'completed'

def test_iteration_protocol(module):

	assert list(module(SEQUENCE)['sequence']()) == [1, 2, 3]

def test_calls_create_independent_tasks(module):

	counter = module(COUNTER)['counter']
	a, b = counter(), counter()
	assert (next(a), next(a), next(a)) == (0, 1, 2)
	assert next(b) == 0
	assert next(a) == 3

def test_inject_without_recovery(module):

	sequence = module(SEQUENCE)['sequence']()
	error = ValueError('oops')
	assert sequence.advance() == record(1, False)
	with pytest.raises(ValueError) as info:
		sequence.inject_exception(error)
	assert info.value is error
	assert sequence.state == 'completed'
	assert sequence.advance() == record(None, True)

def test_inject_into_completed_task(module):

	sequence = module(SEQUENCE)['sequence']()
	list(sequence)
	with pytest.raises(KeyError):
		sequence.inject_exception(KeyError('late'))

def test_force_return(module):

	sequence = module(SEQUENCE)['sequence']()
	sequence.advance()
	assert sequence.force_return(8) == record(8, True)
	assert sequence.advance() == record(None, True)
	assert sequence.force_return(9) == record(9, True)

def test_return_statement(module):

	early = module(EARLY_RETURN)['early']()
	assert early.advance() == record(1, False)
	assert early.advance() == record(2, True)
	assert early.advance() == record(None, True)

def test_first_advance_value_is_ignored(module):

	accumulator = module(ACCUMULATOR)['accumulator']()
	assert accumulator.advance(3).value == 1
	assert [accumulator.advance().value for _ in range(4)] == [2, 3, 4, 5]

def test_first_advance_value_is_not_bound(module):

	first = module(FIRST_VALUE)['first']()
	assert first.advance('ignored') == record(1, False)
	assert first.advance() == record(None, False)

def test_sent_values_reach_the_suspension_point(module):

	accumulator = module(ACCUMULATOR)['accumulator']()
	assert accumulator.advance().value == 1
	assert accumulator.advance(4).value == 5
	assert accumulator.advance().value == 9
	assert accumulator.advance(2).value == 11

def test_substitution_chain(module):

	concatenate = module(CONCATENATE)['concatenate']()
	assert concatenate.advance().value == 'foo'
	assert concatenate.advance('bar').value == 'foobar'
	assert concatenate.advance('baz').value == 'foobarbaz'
	assert concatenate.advance('yui') == record('foobarbazyui', False)
	assert concatenate.advance() == record(None, True)

def test_catch_recovers_from_injected_error(module):

	recovery = module(RECOVERY)['recovery']()
	error = RuntimeError('boom')
	assert recovery.advance() == record(1, False)
	assert recovery.inject_exception(error) == record(error, False)
	assert recovery.advance() == record(3, False)
	assert recovery.advance() == record(None, True)

def test_body_completion_skips_catch(module):

	assert list(module(RECOVERY)['recovery']()) == [1, 2, 3]

def test_catch_recovers_from_host_error(module):

	divide = module(HOST_ERROR)['divide']
	assert divide(6, 3).advance() == record(2.0, True)
	assert divide(1, 0).advance() == record('error', True)

def test_finally_runs_on_normal_completion(module):

	calls = []
	cleanup = module(CLEANUP, {'tidy': lambda: calls.append('tidy')})['cleanup']()
	assert list(cleanup) == [1, 2]
	assert calls == ['tidy']

def test_finally_runs_on_force_return(module):

	calls = []
	cleanup = module(CLEANUP, {'tidy': lambda: calls.append('tidy')})['cleanup']()
	cleanup.advance()
	assert cleanup.force_return(5) == record(5, True)
	assert calls == ['tidy']
	assert cleanup.advance() == record(None, True)

def test_finally_runs_before_error_propagates(module):

	calls = []
	cleanup = module(CLEANUP, {'tidy': lambda: calls.append('tidy')})['cleanup']()
	cleanup.advance()
	with pytest.raises(LookupError):
		cleanup.inject_exception(LookupError())
	assert calls == ['tidy']
	assert cleanup.state == 'completed'

def test_finally_may_suspend_a_forced_return(module):

	cleanup = module(CLEANUP_YIELDS)['cleanup']()
	cleanup.advance()
	assert cleanup.force_return(5) == record('cleanup', False)
	assert cleanup.advance() == record(5, True)

def test_finally_may_override_a_forced_return(module):

	cleanup = module(CLEANUP_OVERRIDES)['cleanup']()
	cleanup.advance()
	assert cleanup.force_return(5) == record('override', True)

def test_inject_before_start(module):

	calls = []
	cleanup = module(CLEANUP, {'tidy': lambda: calls.append('tidy')})['cleanup']()
	with pytest.raises(ValueError):
		cleanup.inject_exception(ValueError())
	assert cleanup.state == 'completed'
	assert calls == []

def test_force_return_before_start(module):

	calls = []
	cleanup = module(CLEANUP, {'tidy': lambda: calls.append('tidy')})['cleanup']()
	assert cleanup.force_return(4) == record(4, True)
	assert cleanup.advance() == record(None, True)
	assert calls == []

def test_raise(module):

	namespace = module(RAISE)
	with pytest.raises(Exception, match = 'oops'):
		namespace['failing']().advance()
	with pytest.raises(fault) as info:
		namespace['invalid']().advance()
	assert info.value.status == 'RAIS'

def test_reentry_faults(module):

	tasks = []
	namespace = module(REENTER, {'again': lambda: tasks[0].advance()})
	tasks.append(namespace['reenter']())
	with pytest.raises(fault) as info:
		tasks[0].advance()
	assert info.value.status == 'RUNS'
	assert tasks[0].state == 'completed'

GUARDED_LOOP = '''
.routine guarded
START
	.bind 0 0; i
	START
		TRY
			.yield 0 i
		END
		CATCH; e
			.yield 0 'caught'
		END
		+ i i 1
		.loop 0
	END
END
'''

BRANCHING_LOOP = '''
.routine classify; limit
START
	.bind 0 0; i
	START
		START
			>= stop i limit
			.if 0 stop
			.break 0
		END
		> big i 1
		START
			.if 0 big
			.yield 0 'big'
			.if 0
		END
		ELSE
			.yield 0 i
		END
		+ i i 1
		.loop 0
	END
	.return 0 i
END
'''

TIDY_LOOP = '''
.routine evens; limit
START
	.bind 0 0; i
	START
		+ i i 1
		START
			> over i limit
			.if 0 over
			.break 0
		END
		TRY
			% r i 2
			START
				.if 0 r
				.continue 0
			END
			.yield 0 i
		END
		FINALLY
			tidy 0 i
		END
		.loop 0
	END
END
'''

BREAK_FROM_TRY = '''
.routine drain
START
	START
		TRY
			.break 0
		END
		FINALLY
			tidy 0 'body'
		END
		.loop 0
	END
	.return 0 'out'
END
'''

BREAK_FROM_FINALLY = '''
.routine drain
START
	START
		TRY
			.yield 0 1
		END
		FINALLY
			tidy 0 'finally'
			.break 0
		END
		.loop 0
	END
	.return 0 'out'
END
'''

BODY_LOOP = '''
.routine forever
START
	.yield 0 1
	.loop 0
END
'''

def test_loop_around_catch_segment(module):

	guarded = module(GUARDED_LOOP)['guarded']()
	assert guarded.advance() == record(0, False)
	assert guarded.advance() == record(1, False)
	assert guarded.advance() == record(2, False)
	assert guarded.inject_exception(ValueError()) == record('caught', False)
	assert guarded.advance() == record(3, False)
	assert guarded.state == 'suspended_yield'

def test_loop_around_else_segment(module):

	classify = module(BRANCHING_LOOP)['classify'](4)
	assert [classify.advance().value for _ in range(4)] == [0, 1, 'big', 'big']
	assert classify.advance() == record(4, True)
	assert classify.state == 'completed'

def test_continue_and_break_run_finally(module):

	calls = []
	evens = module(TIDY_LOOP, {'tidy': calls.append})['evens'](4)
	assert list(evens) == [2, 4]
	assert calls == [1, 2, 3, 4]
	assert evens.completions == []

def test_break_from_body_runs_finally(module):

	calls = []
	drain = module(BREAK_FROM_TRY, {'tidy': calls.append})['drain']()
	assert drain.advance() == record('out', True)
	assert calls == ['body']

def test_break_from_finally_discards_completion(module):

	calls = []
	drain = module(BREAK_FROM_FINALLY, {'tidy': calls.append})['drain']()
	assert drain.advance() == record(1, False)
	assert drain.force_return(5) == record('out', True)
	assert calls == ['finally']
	assert drain.completions == []

def test_loop_over_routine_body(module):

	forever = module(BODY_LOOP)['forever']()
	assert [forever.advance() for _ in range(3)] == [record(1, False)] * 3
	assert forever.state == 'suspended_yield'
