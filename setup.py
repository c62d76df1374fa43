from setuptools import find_packages, setup

with open("./README.md", encoding='utf-8') as in_:
    setup(
        name='excel-xml-rows',
        version='0.1.0',
        packages=find_packages(where='src'),
        package_dir={
            "": "src"
        },
        license='MIT',
        description='Import and export rows of string cells as Excel XML Spreadsheet 2003 (SpreadsheetML) documents, '
                    'with an XlsxWriter-backed .xlsx exporter.',
        long_description=in_.read(),
        long_description_content_type="text/markdown",
        python_requires='>=3.6',
        install_requires=[
            "attrs",
            "xlsxwriter",
        ],
        extras_require={
            'testing': ['pytest', 'pytest-mock']
        },
    )
