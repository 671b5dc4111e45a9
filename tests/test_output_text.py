from WBV import output_text
from WBV import sysparams
from WBV.pipeline import compute
from WBV.units import _Temperature

from conftest import liters, process, backward, forward


def render(res, *args):
	lines = []
	output_text.printresult(res, *args, out=lines.append)
	return lines


class TestPrintResult:
	def test_volume_history(self):
		lines = render(compute(process(), backward(20.5)))
		text = '\n'.join(lines)
		for title in ['Strike water', 'Grain absorption', 'Sparge',
		    'Boil off', 'Kettle loss', 'Fermentor loss',
		    'Package dilution', 'Total water']:
			assert title in text
		assert 'Pale' in text

	def test_infusion_titles(self):
		res = compute(process(infusions=(liters(2),)), backward(20.5))
		assert any(x.startswith('Infusion 1') for x in render(res))

	def test_scaled_grain_bill(self):
		res = compute(process(mash_volume=liters(15)),
		    forward(1.050, attenuation=75))
		text = '\n'.join(render(res))
		assert 'scaled by' in text
		assert 'ABV (package)' in text

	def test_water_only_with_attenuation(self):
		res = compute(process(), backward(20, grainbill=[],
		    attenuation=75))
		text = '\n'.join(render(res))
		assert 'Original gravity' in text
		assert 'ABV' not in text

	def test_strike_temperature(self):
		res = compute(process(), backward(20.5))
		text = '\n'.join(render(res, _Temperature(67)))
		assert 'Strike temperature' in text

	def test_us_units(self):
		sysparams.setparam('units_output', 'us')
		lines = render(compute(process(), backward(20.5)))
		assert any('gal' in x for x in lines)

	def test_csv(self):
		lines = []
		output_text.printcsv(compute(process(), backward(20.5)),
		    out=lines.append)
		assert lines[0] == 'stage|volume|gravity'
		assert lines[1] == 'strike|20.000|1.0000'
		assert lines[-1].startswith('package|20.500|')
		assert len(lines) == 9


class TestStageTitle:
	def test_titles(self):
		assert output_text.stagetitle('preboil') == 'Sparge'
		assert output_text.stagetitle('mash3') == 'Infusion 3'
