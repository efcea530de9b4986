from setuptools import setup

setup(
    name='gitlanes',
    version='0.1',
    description='Commit graph lane layout for Git histories',
    author='Iliyas Jorio',
    url='https://github.com/jorio/gitfourchette',
    classifiers=[
        'Topic :: Software Development :: Version Control :: Git',
        'Environment :: X11 Applications :: Qt',
        'Intended Audience :: Developers',
    ],
    packages=[
        'gitlanes',
        'gitlanes.graph',
        'gitlanes.toolbox',
    ],
    entry_points={
        'console_scripts': ['gitlanes=gitlanes.__main__:main']
    },
    python_requires='>= 3.11',
    install_requires=[
        'pygit2 >= 1.14',
        'pyqt6',
    ],
    extras_require={
        'pyside6': ['PySide6 !=6.4.0, !=6.4.0.1, !=6.5.1'],
        'memory-indicator': ['psutil'],
        'test': ['pytest', 'pytest-qt'],
    },
    tests_require=[
        'pytest',
        'pytest-qt',
    ],
)
