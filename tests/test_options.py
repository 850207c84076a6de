import pytest

from scregulon.grn import ViperOptions


def test_defaults():
    opts = ViperOptions()
    assert opts.method == "scale"
    assert opts.minsize == 4
    assert opts.eset_filter is False
    assert opts.cores == 1


def test_invalid_values():
    with pytest.raises(ValueError):
        ViperOptions(method="ttest")
    with pytest.raises(ValueError):
        ViperOptions(minsize=0)
    with pytest.raises(ValueError):
        ViperOptions(cores=0)


def test_from_dict_accepts_r_style_keys():
    opts = ViperOptions.from_dict(
        {"method": "rank", "minsize": 5, "eset.filter": True, "cores": 2, "verbose": False, "pleiotropy": False}
    )
    assert opts.method == "rank"
    assert opts.minsize == 5
    assert opts.eset_filter is True
    assert opts.cores == 2
    assert opts.extra == {"pleiotropy": False}


def test_structural_keys_are_dropped():
    with pytest.warns(UserWarning, match="Ignoring"):
        opts = ViperOptions(extra={"net": "bogus", "data": None, "pleiotropy": False})
    assert opts.extra == {"pleiotropy": False}
    kwargs = opts.routine_kwargs()
    assert "net" not in kwargs and "data" not in kwargs


def test_routine_kwargs_take_named_fields():
    opts = ViperOptions(minsize=7, batch_size=500, extra={"tmin": 1})
    kwargs = opts.routine_kwargs()
    assert kwargs["tmin"] == 7
    assert kwargs["bsize"] == 500


def test_expression_argument_names_are_dropped():
    with pytest.warns(UserWarning, match="Ignoring"):
        opts = ViperOptions.from_dict({"minsize": 4, "eset": object(), "expression": object()})
    assert opts.extra == {}
