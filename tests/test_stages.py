import pytest

from WBV import stages
from WBV import pipeline
from WBV.units import Strength, _Volume
from WBV.utils import ComputationError
from WBV.wort import Wort

from conftest import liters, process, backward, forward


class TestWort:
	def test_water_keeps_extract(self):
		w = Wort(liters(20), 1000)
		w.adjust_water(liters(5))
		assert w.extract() == pytest.approx(1000)
		assert w.strength() == pytest.approx(1.040)
		w.adjust_water(_Volume(-5))
		assert w.strength() == pytest.approx(1.050)

	def test_loss_keeps_strength(self):
		w = Wort(liters(20), 1000)
		w.adjust_volume(_Volume(-4))
		assert w.volume() == pytest.approx(16)
		assert w.strength() == pytest.approx(1.050)
		assert w.extract() == pytest.approx(800)

	def test_cannot_lose_more_than_volume(self):
		w = Wort(liters(2), 100)
		with pytest.raises(ComputationError):
			w.adjust_volume(_Volume(-3))
		with pytest.raises(ComputationError):
			w.adjust_water(_Volume(-3))

	def test_empty_is_water(self):
		assert Wort().strength() == 1.0

	def test_copy(self):
		w = Wort(liters(20), 1000)
		c = w.copy()
		c.adjust_water(liters(5))
		assert w.volume() == pytest.approx(20)

	def test_set_strength(self):
		w = Wort(liters(20), 1000)
		w.set_strength(Strength(10, Strength.SG_PTS))
		assert w.extract() == pytest.approx(200)
		assert w.volume() == pytest.approx(20)


class TestStageTable:
	def test_names(self):
		assert stages.stagenames(0) == ['strike', 'presparge', 'preboil',
		    'postboil_preloss', 'postboil', 'fermentor', 'postferment',
		    'package']
		assert stages.stagenames(2)[1:3] == ['mash1', 'mash2']

	def test_inverses(self):
		p = process(infusions=(liters(2),),
		    postboil_dilution=liters(1), postferment_dilution=liters(0.5))
		r = backward(20)
		res = pipeline.compute(p, r)
		ctx = pipeline._mkcontext(p, r, r.grainbill, p.sparge_volume,
		    res.strike_volume())
		table = stages.stagetable(1)
		cps = res.checkpoints
		for s, prev, cp in zip(table[1:], cps, cps[1:]):
			assert s.name == cp.name
			assert s.backward(cp.volume, ctx) \
			    == pytest.approx(prev.volume)

	def test_forward_does_not_mutate(self):
		p, r = process(), backward(20)
		ctx = pipeline._mkcontext(p, r, r.grainbill, p.sparge_volume,
		    liters(20))
		w = Wort(liters(20))
		for s in stages.stagetable(0)[1:]:
			before = (w.volume(), w.extract())
			nw = s.forward(w, ctx)
			assert (w.volume(), w.extract()) == before
			w = nw

	def test_strike_from_mash_volume(self):
		p, r = process(mash_volume=liters(12)), backward(20)
		ctx = pipeline._mkcontext(p, r, r.grainbill, p.sparge_volume,
		    None)
		strike = stages.stagetable(0)[0]
		assert strike.forward(None, ctx).volume() == pytest.approx(17)
		ctx = ctx._replace(strike_volume = liters(20))
		assert strike.forward(None, ctx).volume() == pytest.approx(20)

	def test_upto(self):
		table = stages.stagetable(1)
		names = [s.name for s in stages.upto(table, stages.PRESPARGE)]
		assert names == ['strike', 'mash1', 'presparge']
		with pytest.raises(KeyError):
			stages.upto(table, 'mash2')

	def test_final_gravity_above_original(self):
		p = process(mash_volume=liters(15))
		r = forward(1.050, final_gravity=Strength(1.070, Strength.SG))
		with pytest.raises(ComputationError) as e:
			pipeline.compute(p, r)
		assert e.value.stage == stages.POSTFERMENT
		assert e.value.quantity == 'final_gravity'
