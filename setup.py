from setuptools import find_packages, setup

package_name = 'robot_drawer'

setup(
    name=package_name,
    version='0.1.0',
    packages=find_packages(exclude=['test', 'test.*']),
    package_data={
        package_name: ['config/*.yaml'],
    },
    python_requires='>=3.11',
    install_requires=[
        'setuptools',
        'paho-mqtt>=2.0',
        'pyyaml',
        'bleak>=0.22',
    ],
    zip_safe=True,
    maintainer='hansoo',
    maintainer_email='hansoo@todo.todo',
    description='Freehand drawing to robot motion command compiler and link',
    license='Apache-2.0',
    extras_require={
        'test': [
            'pytest',
        ],
    },
    entry_points={
        'console_scripts': [
            'robot_drawer = robot_drawer.presentation.main:main',
        ],
    },
)
