"""Declaration checks run once per proxy class definition."""

import functools

import pytest

from entityproxy import EntityProxy, ValidationError, create_proxy, getter, method


class Helper:
    def value(self):
        return 1


class TestGetterValidation:

    def test_rejects_non_function_getter(self):
        with pytest.raises(ValidationError) as excinfo:
            create_proxy(entity_type="User", getters={"foo": 42})

        assert str(excinfo.value) == (
            'Proxy getters should be functions, but getter "foo" is of type int.'
        )

    def test_rejects_getter_with_arguments(self):
        def foo(self, a, b):
            return a + b

        with pytest.raises(ValidationError) as excinfo:
            create_proxy(entity_type="User", getters={"foo": foo})

        assert str(excinfo.value) == (
            'Proxy getters should not accept any arguments, '
            'but getter "foo" accepts 2 argument(s).'
        )

    def test_rejects_getter_with_required_keyword_only_argument(self):
        def foo(self, *, flag):
            return flag

        with pytest.raises(ValidationError, match='getter "foo" accepts 1 argument'):
            create_proxy(getters={"foo": foo})

    def test_accepts_optional_parameters_and_lambdas(self):
        def with_default(self, scale=2):
            return scale

        Proxy = create_proxy(getters={
            "with_default": with_default,
            "short": lambda self: self.id,
            "variadic": lambda *args, **kwargs: len(args),
        })

        proxy = Proxy(7)
        assert proxy.with_default == 2
        assert proxy.short == 7
        assert proxy.variadic == 1

    def test_rejects_getter_without_receiver(self):
        def foo():
            return 1

        with pytest.raises(ValidationError) as excinfo:
            create_proxy(getters={"foo": foo})

        assert 'getter "foo" accepts no positional argument' in str(excinfo.value)

    def test_rejects_bound_method_getter(self):
        with pytest.raises(ValidationError) as excinfo:
            create_proxy(getters={"foo": Helper().value})

        message = str(excinfo.value)
        assert 'Proxy getters should not be bound methods, but getter "foo" is.' in message
        assert '"def foo(self): ..."' in message

    def test_rejects_prebound_partial(self):
        def foo(receiver, proxy):
            return receiver

        with pytest.raises(ValidationError, match='getter "foo" is'):
            create_proxy(getters={"foo": functools.partial(foo, object())})


class TestMethodValidation:

    def test_rejects_non_function_method(self):
        with pytest.raises(ValidationError) as excinfo:
            create_proxy(methods={"bar": "nope"})

        assert str(excinfo.value) == (
            'Proxy methods should be functions, but method "bar" is of type str.'
        )

    def test_rejects_bound_method(self):
        with pytest.raises(ValidationError, match='method "bar" is'):
            create_proxy(methods={"bar": Helper().value})

    def test_accepts_any_arity(self):
        def bar(self, a, b, *rest, key=None):
            return (a, b, rest, key)

        Proxy = create_proxy(methods={"bar": bar})

        assert Proxy(1).bar(1, 2, 3, key="k") == (1, 2, (3,), "k")


class TestDefinition:

    def test_rejects_non_string_entity_type(self):
        with pytest.raises(ValidationError) as excinfo:
            create_proxy(entity_type=5)

        assert str(excinfo.value) == 'Proxy entity_type should be a string, but got int.'

    def test_does_not_mutate_declaration_tables(self):
        def foo(self):
            return 1

        getters = {"foo": foo}
        methods = {}
        create_proxy(entity_type="User", getters=getters, methods=methods)

        assert getters == {"foo": foo}
        assert methods == {}

    def test_definition_tables_are_read_only(self):
        Proxy = create_proxy(entity_type="User")
        definition = Proxy.__proxy_definition__

        with pytest.raises(TypeError):
            definition.getters["foo"] = lambda self: 1

        assert "data_values" in definition.getters
        assert "clear_cache" in definition.methods

    def test_class_statement_is_validated(self):
        with pytest.raises(ValidationError, match='getter "bad"'):
            class Broken(EntityProxy):
                @getter
                def bad(self, x):
                    return x

    def test_decorators_reject_callables_that_cannot_be_marked(self):
        with pytest.raises(ValidationError, match='getter "len" is of type builtin_function_or_method'):
            getter(len)

        with pytest.raises(ValidationError, match='method "len" is of type builtin_function_or_method'):
            method(len)

    def test_decorators_reject_bound_methods(self):
        with pytest.raises(ValidationError, match='getter "value" is'):
            getter(Helper().value)

        with pytest.raises(ValidationError, match='method "value" is'):
            method(Helper().value)
