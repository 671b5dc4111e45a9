from WBV.fermentables import Fermentable
from WBV.getparam import getparam
from WBV.params import RecipeParameters
from WBV.units import M, S, T, V
from WBV.pipeline import compute
from WBV import mash
from WBV import output_text
from WBV import sysparams

if __name__ == '__main__':
	sysparams.processdefaults()
	sysparams.processline('mash_efficiency=75%')
	sysparams.processline('boiloff_perhour=3L')
	sysparams.processline('kettle_loss=1L')
	sysparams.processline('fermentor_loss=0.5L')

	grainbill = [
		Fermentable('Pale ale malt',	M(4.5, M.KG),	S(1.037, S.SG)),
		Fermentable('Crystal 60',	M(300, M.G),	S(1.034, S.SG)),
		Fermentable.byextract('Wheat malt', M(200, M.G), 83),
	]

	p = sysparams.process_parameters(
		sparge_volume = V(10, V.LITER),
	)

	r = RecipeParameters(grainbill, sysparams.efficiency(),
		target_package_volume = V(20, V.LITER),
		attenuation = 78,
		name = 'Pale',
	)

	res = compute(p, r)
	output_text.printresult(res, T(67, T.degC))

	# same beer, step mashed
	res = mash.compute_withrests(p, r, [T(52, T.degC), T(67, T.degC)],
	    getparam('infusion_temp'))
	output_text.printresult(res, T(52, T.degC))
