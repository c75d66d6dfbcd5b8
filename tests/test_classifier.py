import pytest

from classifier import (
    CONTAINERS, DESCRIPTIONS, KEYWORD_TABLE, CategoryLabel,
    classify, container_for, describe_label, label_for_container, match_keyword,
)


@pytest.mark.parametrize("text", [
    "Se observa una botella de plástico vacía",
    "un frasco de vidrio",
    "una lata de gaseosa",
    "caja de cartón doblada",
])
def test_recyclable_descriptions(text):
    assert classify(text) is CategoryLabel.RECYCLABLE


@pytest.mark.parametrize("text", [
    "cáscara de banano",
    "restos de comida en un plato",
    "hojas secas del jardín",
])
def test_organic_descriptions(text):
    assert classify(text) is CategoryLabel.ORGANIC


@pytest.mark.parametrize("text", [
    "papel higiénico usado",
    "una servilleta arrugada",
    "un pañal desechable",
])
def test_non_recyclable_descriptions(text):
    assert classify(text) is CategoryLabel.NON_RECYCLABLE


def test_first_category_wins_over_later_matches():
    assert classify("una botella con restos de comida") is CategoryLabel.RECYCLABLE
    label, keyword = match_keyword("una botella con restos de comida")
    assert keyword == "botella"


def test_matching_is_case_insensitive():
    assert classify("PAPEL HIGIÉNICO") is classify("papel higiénico") is CategoryLabel.NON_RECYCLABLE
    assert classify("BOTELLA") is CategoryLabel.RECYCLABLE


def test_substring_containment_is_kept():
    assert match_keyword("metalizado") == (CategoryLabel.RECYCLABLE, "metal")


def test_unrecognized_when_nothing_matches():
    assert classify("un gato durmiendo") is CategoryLabel.UNRECOGNIZED
    assert describe_label(CategoryLabel.UNRECOGNIZED) == "No se reconoce claramente un residuo en la imagen"
    assert container_for(CategoryLabel.UNRECOGNIZED) is None


@pytest.mark.parametrize("text", ["", None, 42, "   "])
def test_never_raises_on_odd_input(text):
    assert classify(text) is CategoryLabel.UNRECOGNIZED


def test_repeated_calls_agree():
    text = "Una lata aplastada junto a una cáscara"
    assert classify(text) is classify(text)


def test_keyword_table_order_and_casing():
    assert [label for label, _ in KEYWORD_TABLE] == [
        CategoryLabel.RECYCLABLE, CategoryLabel.ORGANIC, CategoryLabel.NON_RECYCLABLE,
    ]
    for _, keywords in KEYWORD_TABLE:
        assert all(k == k.lower() for k in keywords)


def test_tables_are_read_only():
    with pytest.raises(TypeError):
        CONTAINERS[CategoryLabel.RECYCLABLE] = "Azul"
    with pytest.raises(TypeError):
        DESCRIPTIONS[CategoryLabel.ORGANIC] = "otro"


def test_recyclable_description_text():
    assert describe_label(CategoryLabel.RECYCLABLE) == "Residuos Aprovechables (plástico, vidrio, metales, papel y cartón)"


@pytest.mark.parametrize("container,expected", [
    ("Blanco (Aprovechables)", CategoryLabel.RECYCLABLE),
    ("Verde (Orgánicos)", CategoryLabel.ORGANIC),
    ("Negro (No Aprovechables)", CategoryLabel.NON_RECYCLABLE),
    ("blanco", CategoryLabel.RECYCLABLE),
    ("  Verde ", CategoryLabel.ORGANIC),
    ("Azul", CategoryLabel.UNRECOGNIZED),
    ("Amarillo (Plásticos)", CategoryLabel.UNRECOGNIZED),
    ("Negro (Orgánicos)", CategoryLabel.UNRECOGNIZED),
    ("Blanco (Peligrosos)", CategoryLabel.UNRECOGNIZED),
    ("verde oscuro", CategoryLabel.UNRECOGNIZED),
    ("", CategoryLabel.UNRECOGNIZED),
    (None, CategoryLabel.UNRECOGNIZED),
])
def test_label_for_container(container, expected):
    assert label_for_container(container) is expected
