import pytest


@pytest.fixture
def module():
	from hypnos.runtime import load

	def compile(source, namespace = None, *flags):
		return load(source, namespace, 'suppress', *flags)

	return compile


@pytest.fixture
def quiet():
	from hypnos.hemera import handler

	return handler(('suppress',))
