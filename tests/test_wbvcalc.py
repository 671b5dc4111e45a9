import os
import runpy

import pytest

from WBV.utils import PilotError

wbvcalc = runpy.run_path(os.path.join(os.path.dirname(__file__),
    '..', 'bin', 'wbvcalc.py'))

RECIPE = '''
name: Reference
fermentables:
  Pale: 5kg @ 1.036
package_volume: 20.5L
sparge_volume: 10L
boil: 60
'''

SYSPARAMS = ['-P', 'me=100%', '-P', 'bo=3L', '-P', 'kl=1L',
    '-P', 'fl=0.5L']


@pytest.fixture
def recipe(tmp_path, monkeypatch):
	monkeypatch.chdir(tmp_path)
	def write(text):
		f = tmp_path / 'recipe.yaml'
		f.write_text(text)
		return str(f)
	return write


def run(*args):
	lines = []
	res = wbvcalc['run'](['wbvcalc'] + list(args), out=lines.append)
	return res, lines


class TestWbvcalc:
	def test_backward(self, recipe):
		res, lines = run(*(SYSPARAMS + [recipe(RECIPE)]))
		assert res.strike_volume() == pytest.approx(20)
		assert res.name == 'Reference'
		assert any('Strike water' in x for x in lines)

	def test_csv(self, recipe):
		res, lines = run(*(SYSPARAMS + ['-c', recipe(RECIPE)]))
		assert lines[1] == 'strike|20.000|1.0000'

	def test_gravity_override(self, recipe):
		text = RECIPE + 'mash_volume: 15L\n'
		res, lines = run(*(SYSPARAMS + ['-s', '1.050', recipe(text)]))
		assert res.original_gravity() == pytest.approx(1.050)

	def test_volume_override(self, recipe):
		res, lines = run(*(SYSPARAMS + ['-v', '22.5L', recipe(RECIPE)]))
		assert res.package_volume() == pytest.approx(22.5)

	def test_yaml_numbers(self, recipe):
		text = RECIPE + 'final_gravity: 1.010\n'
		res, lines = run(*(SYSPARAMS + [recipe(text)]))
		assert res.final_gravity() == pytest.approx(1.010)

	def test_extract_percentage(self, recipe):
		text = RECIPE.replace('1.036', '80%')
		res, lines = run(*(SYSPARAMS + [recipe(text)]))
		assert res.grainbill[0].ppg() == pytest.approx(0.8 * 46.214)

	def test_mash_temperatures(self, recipe):
		text = RECIPE + 'mash_temperatures: [52degC, 67degC]\n'
		res, lines = run(*(SYSPARAMS + ['-t', '52degC', recipe(text)]))
		assert 'mash1' in res.names()
		assert any('Strike temperature' in x for x in lines)

	def test_unknown_field(self, recipe):
		with pytest.raises(PilotError):
			run(*(SYSPARAMS + [recipe(RECIPE + 'yeast: WLP001\n')]))

	def test_bad_value(self, recipe):
		with pytest.raises(PilotError):
			run(*(SYSPARAMS + [recipe(RECIPE + 'mash_volume: 15\n')]))

	def test_missing_sysparams(self, recipe):
		with pytest.raises(PilotError):
			run(recipe(RECIPE))

	def test_one_anchor_override(self, recipe):
		with pytest.raises(PilotError):
			run(*(SYSPARAMS + ['-s', '1.050', '-v', '20L',
			    recipe(RECIPE)]))
