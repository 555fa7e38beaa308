import setuptools

setuptools.setup(
	name='bnf-tools',
	version='0.1.0',
	packages=[
		'bnftools',
		'bnftools.parsing',
		'bnftools.support',
	],
	description='Match text against prioritized BNF rules, then compile the parse tree with callbacks',
	long_description=open('README.md').read(),
	long_description_content_type="text/markdown",
	classifiers=[
		"Programming Language :: Python :: 3.9",
		"License :: OSI Approved :: MIT License",
		"Operating System :: OS Independent",
		"Topic :: Software Development :: Compilers",
		"Development Status :: 3 - Alpha",
    ],
)
