# <license>
#
#     This file is part of the Sapphire Operating System.
#
#     Copyright (C) 2013-2022  Jeremy Billheimer
#
#
#     This program is free software: you can redistribute it and/or modify
#     it under the terms of the GNU General Public License as published by
#     the Free Software Foundation, either version 3 of the License, or
#     (at your option) any later version.
#
#     This program is distributed in the hope that it will be useful,
#     but WITHOUT ANY WARRANTY; without even the implied warranty of
#     MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
#     GNU General Public License for more details.
#
#     You should have received a copy of the GNU General Public License
#     along with this program.  If not, see <http://www.gnu.org/licenses/>.
#
# </license>

from setuptools import setup

setup(
    name='taskingmap',

    version='1.0.0',

    packages=['taskingmap',
              'taskingmap.common',
            ],

    scripts=[],

    license='GNU General Public License v3',

    description='TASKING linker MAP file parser and viewer',

    long_description=open('README.txt').read(),

    python_requires='>=3.7',

    install_requires=[
        "appdirs >= 1.4.3",
        "click >= 8.1.3",
        "colorlog >= 4.1.0",
        "colored-traceback >= 0.3.0",
    ],

    extras_require={
        'test': [
            "pytest >= 6.2.4",
            "pytest-cov >= 2.11.1",
        ],
    },

    entry_points='''
        [console_scripts]
        taskingmap=taskingmap.cli:main
    ''',
)
