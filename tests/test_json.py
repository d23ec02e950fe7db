import dslink


def test_render_is_deterministic():

    one = {'zulu': 1, 'alpha': [1, 2], 'mike': {'b': None, 'a': True}}
    two = {'mike': {'a': True, 'b': None}, 'alpha': [1, 2], 'zulu': 1}

    rendered = dslink.json.render(one)

    assert isinstance(rendered, str)
    assert rendered == dslink.json.render(two)
    assert rendered == '{"alpha":[1,2],"mike":{"a":true,"b":null},"zulu":1}'


def test_render_scalars():

    # It won't do to compare floats beyond what every library agrees on,
    # as there is variance in float formatting between the modules used.

    assert dslink.json.render('ok') == '"ok"'
    assert dslink.json.render(None) == 'null'
    assert dslink.json.render([False, 2.5]) == '[false,2.5]'


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
