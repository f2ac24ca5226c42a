from gravitywell.utils import mass_to_display, distance_to_display, time_to_display


def test_mass_to_display_ranges():
    assert mass_to_display(0) == "0 M⊕"
    assert mass_to_display(3) == "3.00 M⊕"
    assert mass_to_display(0.1) == "0.10 M⊕"
    assert mass_to_display(0.05) == "5.00e-02 M⊕"
    assert mass_to_display(1003) == "1.00k M⊕"


def test_distance_to_display_ranges():
    assert distance_to_display(0) == "0 u"
    assert distance_to_display(50) == "50.0 u"
    assert distance_to_display(2500) == "2.50 ku"
    assert distance_to_display(-2500) == "-2.50 ku"


def test_time_to_display_ranges():
    assert time_to_display(-1) == "Day: N/A"
    assert time_to_display(0) == "Day: 0"
    assert time_to_display(12.3) == "Day: 12"
