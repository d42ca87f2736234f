from setuptools import setup

install_requires = [
  'colorama',
  'ply',
  'tabulate'
]

tests_requires = [
  'pytest',
  'hypothesis'
]

setup(name = 'lc3toolchain',
      version = '0.1',
      description = 'Formatter and linter for LC-3 assembly',
      long_description = 'lc3toolchain parses LC-3 assembly sources, rewrites them in canonical layout, and checks naming and punctuation conventions.',
      license = 'MIT',
      classifiers = [
        'Development Status :: 4 - Beta',
        'Environment :: Console',
        'Intended Audience :: Education',
        'License :: OSI Approved :: MIT License',
        'Operating System :: POSIX :: Linux',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: Implementation :: CPython',
        'Programming Language :: Python :: Implementation :: PyPy',
        'Programming Language :: Assembly',
        'Topic :: Software Development :: Assemblers',
        'Topic :: Software Development :: Quality Assurance'
      ],
      keywords = 'LC-3 assembly formatter linter',
      packages = [
        'lc3toolchain',
        'lc3toolchain.asm',
        'lc3toolchain.tools'
      ],
      entry_points = {
        'console_scripts': [
          'lc3fmt = lc3toolchain.tools.fmt:main',
          'lc3lint = lc3toolchain.tools.lint:main'
        ]
      },
      package_dir = {'lc3toolchain': 'lc3toolchain'},
      zip_safe = False,
      install_requires = install_requires,
      extras_require = {
        'test': tests_requires
      }
     )
