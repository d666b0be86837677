from setuptools import setup, find_packages
setup(
  name = 'srepkit',
  packages = find_packages(include=['srepkit', 'srepkit.*']),
  version = '0.1',
  license='MIT',
  description = 'Interpolation of elliptical skeletal representations (s-reps)',
  keywords = ['Shape analysis', 'Skeletal representation', 'Interpolation'],
  python_requires='>=3.8',
  install_requires=[
          'vtk',
          'numpy',
          'scipy',
          'pyvista'
      ],
  extras_require={
          'test': ['pytest'],
      },
  entry_points={
          'console_scripts': ['srepkit-interpolate=srepkit.__main__:main'],
      },
  classifiers=[
    'Development Status :: 3 - Alpha',
    'Intended Audience :: Developers',
    'Intended Audience :: Science/Research',
    'Topic :: Scientific/Engineering :: Medical Science Apps.',
    'License :: OSI Approved :: MIT License',
    'Programming Language :: Python :: 3',
  ],
)
