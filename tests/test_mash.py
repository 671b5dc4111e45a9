import pytest

from WBV import mash
from WBV.pipeline import compute
from WBV.units import Mass, _Volume, _Temperature
from WBV.utils import ComputationError

from conftest import liters, process, backward, forward


def kg(m):
	return Mass(m, Mass.KG)


class TestStrikeTemperature:
	def test_typical(self):
		t = mash.strike_temperature(liters(20), kg(5), _Temperature(20),
		    _Temperature(67))
		assert 71 < t < 73

	def test_hotter_grain_needs_cooler_water(self):
		cold = mash.strike_temperature(liters(20), kg(5),
		    _Temperature(10), _Temperature(67))
		warm = mash.strike_temperature(liters(20), kg(5),
		    _Temperature(25), _Temperature(67))
		assert warm < cold

	def test_not_enough_water(self):
		with pytest.raises(ComputationError):
			mash.strike_temperature(liters(1), kg(10),
			    _Temperature(20), _Temperature(70))

	def test_no_grain(self):
		with pytest.raises(ComputationError):
			mash.strike_temperature(liters(20), kg(0),
			    _Temperature(20), _Temperature(67))


class TestInfusions:
	rests = (_Temperature(52), _Temperature(63), _Temperature(72))

	def test_infusion_volume(self):
		v = mash.infusion_volume(kg(5), liters(15), _Temperature(52),
		    _Temperature(63), _Temperature(100))
		assert 4.5 < v < 5.5

	def test_reverse_undoes_infusion(self):
		args = (_Temperature(52), _Temperature(63), _Temperature(100))
		v = mash.infusion_volume(kg(5), liters(15), *args)
		rv = mash.reverse_infusion_volume(kg(5), _Volume(15 + v), *args)
		assert rv == pytest.approx(v)

	def test_sequence(self):
		infs = mash.infusions(kg(5), liters(15), self.rests,
		    _Temperature(100))
		assert len(infs) == 2
		assert infs[1] > infs[0]

	def test_strike_for(self):
		water = _Temperature(100)
		strike = mash.strike_for(kg(5), liters(25), self.rests, water)
		infs = mash.infusions(kg(5), strike, self.rests, water)
		assert strike + sum(infs) == pytest.approx(25)

	def test_cannot_cool(self):
		with pytest.raises(ComputationError):
			mash.infusions(kg(5), liters(15),
			    (_Temperature(67), _Temperature(52)), _Temperature(100))

	def test_water_colder_than_rest(self):
		with pytest.raises(ComputationError):
			mash.infusion_volume(kg(5), liters(15), _Temperature(52),
			    _Temperature(63), _Temperature(60))

	def test_no_room_for_strike(self):
		with pytest.raises(ComputationError):
			mash.strike_for(kg(5), liters(1), self.rests,
			    _Temperature(75))


class TestComputeWithRests:
	rests = (_Temperature(52), _Temperature(67))

	def test_backward(self):
		plain = compute(process(), backward(20.5))
		res = mash.compute_withrests(process(), backward(20.5),
		    self.rests, _Temperature(100))
		assert 'mash1' in res.names()
		assert res.mash_volume() == pytest.approx(plain.strike_volume())
		assert res.strike_volume() < plain.strike_volume()
		assert res.package_volume() == pytest.approx(20.5)

	def used(self, res):
		return [cp.change for cp in res if cp.name.startswith('mash')]

	def test_backward_reaches_rests(self):
		res = mash.compute_withrests(process(), backward(20.5),
		    self.rests, _Temperature(100))
		need = mash.infusions(res.grain_mass(), res.strike_volume(),
		    self.rests, _Temperature(100))
		assert self.used(res) == pytest.approx(list(need))

	def test_forward(self):
		p = process(mash_volume=liters(12))
		res = mash.compute_withrests(p, forward(1.050), self.rests,
		    _Temperature(100))
		assert res.volume('mash1') > res.strike_volume()
		assert res.original_gravity() == pytest.approx(1.050)

	def test_forward_reaches_rests(self):
		rests = (_Temperature(40), _Temperature(55), _Temperature(67))
		p = process(mash_volume=liters(12))
		res = mash.compute_withrests(p, forward(1.060), rests,
		    _Temperature(100))
		need = mash.infusions(res.grain_mass(), res.strike_volume(),
		    rests, _Temperature(100))
		assert len(self.used(res)) == 2
		assert self.used(res) == pytest.approx(list(need), rel=1e-5)
		assert res.original_gravity() == pytest.approx(1.060)

	def test_single_rest(self):
		res = mash.compute_withrests(process(), backward(20.5),
		    self.rests[:1], _Temperature(100))
		assert 'mash1' not in res.names()

	def test_not_with_infusions(self):
		with pytest.raises(ComputationError):
			mash.compute_withrests(process(infusions=(liters(2),)),
			    backward(20.5), self.rests, _Temperature(100))
