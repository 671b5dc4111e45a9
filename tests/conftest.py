import pytest

from WBV import sysparams
from WBV.fermentables import Fermentable
from WBV.params import ProcessParameters, RecipeParameters
from WBV.units import Mass, Strength, Volume, Duration


@pytest.fixture(autouse=True)
def pristine_sysparams():
	"""Every test starts from the import-time system parameters."""
	params = dict(sysparams.wbvparams)
	inputs = dict(sysparams.paraminputs)
	yield
	sysparams.wbvparams.clear()
	sysparams.wbvparams.update(params)
	sysparams.paraminputs.clear()
	sysparams.paraminputs.update(inputs)


@pytest.fixture
def brewhouse():
	for p in ['mash_efficiency=100%', 'boiloff_perhour=3L',
	    'kettle_loss=1L', 'fermentor_loss=0.5L']:
		sysparams.processline(p)


def liters(v):
	return Volume(v, Volume.LITER)


def pale(kg=5, potential=1.036):
	return [Fermentable('Pale', Mass(kg, Mass.KG),
	    Strength(potential, Strength.SG))]


def process(**kwargs):
	"""The reference brewhouse: 1.0L/kg, 10L sparge, 3L boiled off,
	1L kettle loss and 0.5L fermentor loss."""
	args = {
		'sparge_volume': liters(10),
		'boiloff_perhour': liters(3),
		'boil_time': Duration(60, Duration.MINUTE),
		'kettle_loss': liters(1),
		'fermentor_loss': liters(0.5),
	}
	args.update(kwargs)
	if 'preboil_volume' in kwargs:
		del args['sparge_volume']
	return ProcessParameters(1.0, **args)


def backward(volume=20.5, grainbill=None, **kwargs):
	if grainbill is None:
		grainbill = pale()
	return RecipeParameters(grainbill, 1.0,
	    target_package_volume=liters(volume), **kwargs)


def forward(og=1.050, grainbill=None, efficiency=1.0, **kwargs):
	if grainbill is None:
		grainbill = pale()
	return RecipeParameters(grainbill, efficiency,
	    target_original_gravity=Strength(og, Strength.SG), **kwargs)
