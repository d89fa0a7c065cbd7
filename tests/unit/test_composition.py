import copy

import pytest

from chemical_elements import atoms
from chemical_elements.composition import ChemicalComposition
from chemical_elements.exceptions import DataIntegrityError, ElementNotFound, ParseError
from chemical_elements.specification import ElementSpecification

H2O_MASS = 18.01056468403
GLUCOSE_MASS = 180.06338810418

formulas = ["H2O", "C6H12O6", "C[13]6H12O6", "C2H-2", "Fe2O3", "CH3Cl", "", "C0H1", "H[2]2O[18]1"]


@pytest.mark.parametrize(
    "f_str,expected",
    [
        ("H2O", {"H": 2, "O": 1}),
        ("C[13]6H12O6", {"C[13]": 6, "H": 12, "O": 6}),
        ("CH3CH2OH", {"C": 2, "H": 6, "O": 1}),
        ("", {}),
    ]
)
def test_parse(backend, f_str, expected):
    composition = ChemicalComposition.parse(f_str, backend=backend)
    assert {str(k): v for k, v in composition.items()} == expected


def test_parse_invalid_type():
    with pytest.raises(TypeError):
        ChemicalComposition.parse({"H": 2})


def test_parse_unclosed_bracket(backend):
    with pytest.raises(ParseError):
        ChemicalComposition.parse("Fe[", backend=backend)


def test_parse_unknown_element(backend):
    with pytest.raises(ElementNotFound):
        ChemicalComposition("H2Xx", backend=backend)


def test_create_empty(backend):
    composition = ChemicalComposition(backend=backend)
    assert len(composition) == 0
    assert composition.mass() == 0.0
    assert composition.backend == backend


def test_create_from_pairs_sums_repeated_keys(backend):
    h = ElementSpecification.parse("H")
    composition = ChemicalComposition.from_pairs(
        [(h, 1), ("O", 1), ("H", 1)], backend=backend
    )
    assert composition.get(h) == 2
    assert len(composition) == 2
    assert composition == ChemicalComposition("H2O")


def test_create_from_mapping(backend):
    composition = ChemicalComposition({"C[13]": 1, "O": 2}, backend=backend)
    assert composition["C[13]"] == 1
    assert composition["O"] == 2
    assert composition["C"] == 0


def test_create_from_composition_is_independent(glucose):
    other = ChemicalComposition(glucose)
    other["C"] = 1
    assert glucose["C"] == 6
    assert other["C"] == 1


def test_create_from_composition_with_other_backend(glucose):
    backend = "vector" if glucose.backend == "mapping" else "mapping"
    other = ChemicalComposition(glucose, backend=backend)
    assert other.backend == backend
    assert other == glucose


@pytest.mark.parametrize(
    "pairs,error",
    [
        ([(6, 1)], TypeError),
        ([("C", 1.5)], TypeError),
        ([("C", True)], TypeError),
        ([("C[", 1)], ParseError),
    ]
)
def test_create_invalid_pairs(backend, pairs, error):
    with pytest.raises(error):
        ChemicalComposition(pairs, backend=backend)


def test_create_invalid_backend():
    with pytest.raises(ValueError):
        ChemicalComposition("H2O", backend="invalid-backend")


def test_get_does_not_insert(water):
    c = ElementSpecification.parse("C")
    assert water.get(c) == 0
    assert c not in water
    assert len(water) == 2


def test_set_zero_creates_entry(water, backend):
    c = ElementSpecification.parse("C")
    water.set(c, 0)
    assert c in water
    assert len(water) == 3
    assert water != ChemicalComposition("H2O", backend=backend)
    assert water.get(c) == 0


def test_set_replaces_count(water):
    water.set("H", 5)
    assert water["H"] == 5


def test_inc(water):
    water.inc("H", 3)
    water.inc("C", 1)
    water.inc("O", -2)
    assert water["H"] == 5
    assert water["C"] == 1
    assert water["O"] == -1


def test_setitem_getitem(water):
    water["N"] = 2
    assert water["N"] == 2
    assert water[ElementSpecification.parse("N")] == 2


def test_contains(water):
    assert "H" in water
    assert ElementSpecification.parse("O") in water
    assert "C" not in water
    assert "O[18]" not in water
    assert "Xx" not in water
    assert "Fe[" not in water
    assert "C[x]" not in water
    assert 1 not in water


def test_invalid_set_leaves_composition_unchanged(water):
    expected = water.copy()
    with pytest.raises(TypeError):
        water.set("H", 2.5)
    with pytest.raises(ElementNotFound):
        water.inc("Xx", 1)
    assert water == expected


def test_iteration(glucose):
    keys = list(glucose)
    assert keys == glucose.keys()
    assert {str(k) for k in keys} == {"C", "H", "O"}
    assert sorted(glucose.values()) == [6, 6, 12]
    assert dict(glucose.items()) == {k: glucose[k] for k in keys}


@pytest.mark.parametrize(
    "f_str,expected",
    [
        ("H2O", H2O_MASS),
        ("C6H12O6", GLUCOSE_MASS),
        ("C[13]1C5H12O6", GLUCOSE_MASS + 1.00335483507),
        ("H-2O-1", -H2O_MASS),
        ("", 0.0),
    ]
)
def test_calc_mass(backend, f_str, expected):
    composition = ChemicalComposition(f_str, backend=backend)
    assert composition.calc_mass() == pytest.approx(expected)


def test_calc_mass_uncataloged_isotope(backend):
    composition = ChemicalComposition("C[99]1", backend=backend)
    with pytest.raises(DataIntegrityError):
        composition.calc_mass()


def test_calc_mass_malformed_element(backend):
    element = atoms.Element("Xa", {10: atoms.Isotope(10.0, 1.0, 10)}, most_abundant_isotope=11)
    composition = ChemicalComposition(backend=backend)
    composition.set(ElementSpecification(element), 1)
    with pytest.raises(DataIntegrityError):
        composition.mass()


def test_mass_does_not_store_value(glucose):
    assert glucose.mass() == pytest.approx(GLUCOSE_MASS)
    assert glucose.mass_cache is None


def test_fmass_stores_value(glucose):
    mass = glucose.fmass()
    assert glucose.mass_cache == mass
    assert glucose.fmass() == mass
    assert glucose.mass() == mass


def test_mass_uses_cached_value(glucose):
    glucose.fmass()
    glucose.mass_cache = 1.0
    assert glucose.mass() == 1.0
    assert glucose.fmass() == 1.0


@pytest.mark.parametrize(
    "mutation",
    [
        lambda x: x.set("H", 1),
        lambda x: x.inc("H", 1),
        lambda x: x.__setitem__("C", 0),
        lambda x: x.__iadd__(ChemicalComposition("H2O")),
        lambda x: x.__isub__(ChemicalComposition("H2O")),
        lambda x: x.__imul__(2),
    ]
)
def test_mutation_clears_mass_cache(glucose, mutation):
    glucose.fmass()
    mutation(glucose)
    assert glucose.mass_cache is None
    assert glucose.fmass() == pytest.approx(glucose.calc_mass())


def test_add(glucose, water):
    result = glucose + water
    assert result == ChemicalComposition("C6H14O7")
    assert glucose == ChemicalComposition("C6H12O6")
    assert result.backend == glucose.backend


def test_add_carries_keys_from_both_operands(water, backend):
    other = ChemicalComposition("C2N1", backend=backend)
    result = water + other
    assert result == ChemicalComposition("H2O1C2N1")


def test_iadd(glucose, water):
    reference = glucose
    glucose += water
    assert glucose is reference
    assert glucose == ChemicalComposition("C6H14O7")


def test_iadd_with_itself(water):
    water += water
    assert water == ChemicalComposition("H4O2")


def test_sub_negative_counts(water, backend):
    result = water - ChemicalComposition("H4C1", backend=backend)
    assert result["H"] == -2
    assert result["C"] == -1
    assert result["O"] == 1


def test_sub_to_zero_keeps_entries(water):
    result = water - water
    assert len(result) == 2
    assert result["H"] == 0
    assert result != ChemicalComposition()
    assert result.mass() == 0.0


def test_isub(glucose, water):
    glucose -= water
    assert glucose == ChemicalComposition("C6H10O5")


def test_mul(water):
    result = water * 3
    assert result == ChemicalComposition("H6O3")
    assert 3 * water == result
    assert water == ChemicalComposition("H2O")


@pytest.mark.parametrize("k,expected", [(0, "H0O0"), (-1, "H-2O-1"), (1, "H2O1")])
def test_mul_zero_and_negative(water, k, expected):
    assert (water * k).to_string() == expected


def test_mul_does_not_materialize_absent_keys(water):
    result = water * 2
    assert "C" not in result
    assert len(result) == 2


def test_imul(water):
    reference = water
    water *= 2
    assert water is reference
    assert water == ChemicalComposition("H4O2")


@pytest.mark.parametrize("other", [1, 1.5, "H2O", None])
def test_add_invalid_operand(water, other):
    with pytest.raises(TypeError):
        water + other
    with pytest.raises(TypeError):
        water - other


@pytest.mark.parametrize("k", [1.5, "2", True])
def test_mul_invalid_operand(water, k):
    with pytest.raises(TypeError):
        water * k


def test_equality_ignores_backend_and_order():
    a = ChemicalComposition("H2O", backend="mapping")
    b = ChemicalComposition("OH2", backend="vector")
    assert a == b
    assert a != "H2O"


def test_composition_is_not_hashable(water):
    with pytest.raises(TypeError):
        hash(water)


def test_to_string(glucose):
    assert glucose.to_string() == "C6H12O6"
    assert str(glucose) == "C6H12O6"
    assert repr(glucose) == 'ChemicalComposition("C6H12O6")'


def test_to_string_priority_order(backend):
    composition = ChemicalComposition("O2N1Fe1H3C2", backend=backend)
    assert composition.to_string() == "C2H3Fe1O2N1"


def test_copy(glucose):
    glucose.fmass()
    glucose_copy = glucose.copy()
    assert glucose_copy == glucose
    assert glucose_copy.mass_cache == glucose.mass_cache
    glucose_copy.inc("C", 1)
    assert glucose["C"] == 6
    assert glucose.mass_cache is not None


def test_copy_module(glucose):
    for other in [copy.copy(glucose), copy.deepcopy(glucose)]:
        assert other == glucose
        other["H"] = 0
        assert glucose["H"] == 12


# properties checked on several compositions


@pytest.mark.parametrize("a_str", formulas)
@pytest.mark.parametrize("b_str", ["H2O", "C[13]1", "N-1", ""])
def test_add_then_sub_is_identity(backend, a_str, b_str):
    a = ChemicalComposition(a_str, backend=backend)
    b = ChemicalComposition(b_str, backend=backend)
    result = (a + b) - b
    for key in a:
        assert result.get(key) == a.get(key)
    for key in result:
        assert result.get(key) == a.get(key)


@pytest.mark.parametrize("a_str", formulas)
@pytest.mark.parametrize("k", [-2, 0, 1, 3])
def test_mul_scales_every_count(backend, a_str, k):
    a = ChemicalComposition(a_str, backend=backend)
    result = a * k
    assert len(result) == len(a)
    for key in a:
        assert result.get(key) == a.get(key) * k


@pytest.mark.parametrize("a_str", formulas)
@pytest.mark.parametrize("b_str", ["H2O", "C6H12O6", "Cl-1"])
def test_mass_is_linear(backend, a_str, b_str):
    a = ChemicalComposition(a_str, backend=backend)
    b = ChemicalComposition(b_str, backend=backend)
    assert (a + b).mass() == pytest.approx(a.mass() + b.mass())


@pytest.mark.parametrize("a_str", formulas)
def test_fmass_is_stable(backend, a_str):
    a = ChemicalComposition(a_str, backend=backend)
    assert a.fmass() == a.fmass()


@pytest.mark.parametrize("a_str", formulas)
def test_backends_are_equivalent(a_str):
    a = ChemicalComposition(a_str, backend="mapping")
    b = ChemicalComposition(a_str, backend="vector")
    assert a == b
    assert a.to_string() == b.to_string()
    assert a.calc_mass() == pytest.approx(b.calc_mass())
    assert (a * 2 - a) == (b * 2 - b)


@pytest.mark.parametrize(
    "f_str,expected",
    [
        ("C2H6Hg1", 232.01759359338),
        ("Pb1", 207.9766525),
        ("C1H3Sn1Cl3", 12.0 + 3 * 1.00782503223 + 119.90220163 + 3 * 34.968852682),
        ("Gd1", 157.9241123),
    ]
)
def test_mass_heavy_elements(backend, f_str, expected):
    composition = ChemicalComposition(f_str, backend=backend)
    assert composition.fmass() == pytest.approx(expected)


@pytest.mark.parametrize("count", [2 ** 31, -(2 ** 31) - 1, 2 ** 40])
def test_set_count_out_of_range(water, count):
    expected = water.copy()
    with pytest.raises(ValueError):
        water.set("C", count)
    assert water == expected


def test_set_count_range_limits(water):
    water.set("C", 2 ** 31 - 1)
    water.set("N", -(2 ** 31))
    assert water["C"] == 2 ** 31 - 1
    assert water["N"] == -(2 ** 31)


def test_inc_overflow_leaves_composition_unchanged(water):
    water.set("C", 2 ** 31 - 1)
    expected = water.copy()
    with pytest.raises(ValueError):
        water.inc("C", 1)
    assert water == expected


def test_mul_overflow_leaves_composition_unchanged(backend):
    composition = ChemicalComposition([("H", 1), ("C", 2 ** 30)], backend=backend)
    expected = composition.copy()
    with pytest.raises(ValueError):
        composition *= 2
    assert composition == expected
    with pytest.raises(ValueError):
        composition * 4


def test_add_overflow_leaves_composition_unchanged(backend):
    composition = ChemicalComposition([("H", 1), ("C", 2 ** 31 - 1)], backend=backend)
    expected = composition.copy()
    with pytest.raises(ValueError):
        composition += ChemicalComposition("H1C1", backend=backend)
    assert composition == expected
