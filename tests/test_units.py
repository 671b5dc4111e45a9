import pytest

from WBV import parse
from WBV import sysparams
from WBV.units import Volume, Mass, Strength, Temperature, Duration
from WBV.units import _Volume, _Strength
from WBV.utils import InvalidParameter, PilotError


class TestUnits:
	def test_volume_conversions(self):
		assert Volume(1, Volume.GALLON) == pytest.approx(3.785411784,
		    rel=1e-6)
		assert Volume(500, Volume.MILLILITER) == pytest.approx(0.5)
		assert _Volume(10).valueas(Volume.QUART) \
		    == pytest.approx(10.566882, rel=1e-6)

	def test_volume_string(self):
		v = Volume(5, Volume.GALLON)
		assert str(v) == '18.9l'
		assert v.stras_system('us') == '5.0gal'
		sysparams.setparam('units_output', 'us')
		assert str(v) == '5.0gal'

	def test_mass(self):
		m = Mass(2.5, Mass.LB)
		assert m.stras(Mass.KG) == '1.13 kg'
		assert m == pytest.approx(1.133981, rel=1e-6)

	def test_temperature(self):
		t = Temperature(152, Temperature.degF)
		assert t == pytest.approx(66.6667, rel=1e-5)
		assert t.valueas(Temperature.degF) == pytest.approx(152)

	def test_duration(self):
		assert Duration(1.5, Duration.HOUR) == 90
		assert str(Duration(60, Duration.MINUTE)) == '60 min'

	def test_strength_points(self):
		s = Strength(50, Strength.SG_PTS)
		assert s == pytest.approx(1.050)
		assert s.valueas(Strength.SG_PTS) == pytest.approx(50)

	def test_strength_output(self):
		s = _Strength(1.050)
		assert str(s) == '1.050'
		sysparams.setparam('strength_output', 'plato')
		assert str(s) == '12.4' + chr(0x00b0) + 'P'

	def test_sg_plato_near_inverse(self):
		for pts in range(10, 80, 5):
			sg = 1 + pts / 1000.0
			p = Strength.sg_to_plato(sg)
			assert Strength.plato_to_sg(p) \
			    == pytest.approx(sg, abs=0.0005)

	def test_attenuate_bypercent(self):
		res = _Strength(1.060).attenuate_bypercent(75)
		assert res['ae'] == pytest.approx(1.015)
		assert res['aa'] == 75
		assert 5.7 < res['abv'] < 6.1

	def test_invalid_unit(self):
		with pytest.raises(InvalidParameter):
			Volume(1, Mass.KG)


class TestParse:
	def test_volume(self):
		assert parse.volume('20L') == pytest.approx(20)
		assert parse.volume('20l') == pytest.approx(20)
		assert parse.volume('5gal') \
		    == pytest.approx(Volume(5, Volume.GALLON))
		assert parse.volume('250ml') == pytest.approx(0.25)

	def test_volume_bad_suffix(self):
		with pytest.raises(ValueError):
			parse.volume('20kg')

	def test_mass(self):
		assert parse.mass('4.5kg') == pytest.approx(4.5)
		assert parse.mass('300g') == pytest.approx(0.3)

	def test_strength(self):
		assert parse.strength('1.050') == pytest.approx(1.050)
		assert parse.strength('50pts') == pytest.approx(1.050)
		assert parse.strength('12degP') \
		    == pytest.approx(Strength(12, Strength.PLATO))

	def test_temperature(self):
		assert parse.temperature('67degC') == pytest.approx(67)
		assert parse.temperature('152' + chr(0x00b0) + 'F') \
		    == pytest.approx(66.6667, rel=1e-5)

	def test_duration(self):
		assert parse.duration('1h') == 60
		assert parse.duration('90min') == 90

	def test_percent(self):
		assert parse.percent('75%') == 75

	def test_ratio(self):
		v, m = parse.ratio('1.1L/kg', parse.volume, parse.mass)
		assert v / m == pytest.approx(1.1)

	def test_lists(self):
		assert parse.volumelist('') == ()
		assert parse.volumelist('3L, 2L') == (3, 2)
		rests = parse.temperaturelist('52degC,67degC')
		assert [float(x) for x in rests] == [52, 67]

	def test_fermentable(self):
		f = parse.fermentable('Pale ale:4.5kg:1.037')
		assert f.name == 'Pale ale'
		assert f.mass == pytest.approx(4.5)
		assert f.ppg() == pytest.approx(37)

	def test_fermentable_bad(self):
		with pytest.raises(PilotError):
			parse.fermentable('Pale ale:4.5kg')
